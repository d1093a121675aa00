"""FastAPI application serving the IDL editor, its storage and the fake API.

Routes:
    GET  /user-idl/{name}   stored IDL as JSON
    POST /user-idl/{name}   replace stored IDL (raw text body)
    POST /graphql/{name}    GraphQL endpoint backed by fake data
    GET  /editor/{name}     editor page

The name segment is optional everywhere; without it the default schema is
used.

Example:
    >>> from gql_faker.core.config import ServerConfig
    >>> from gql_faker.server import create_app
    >>> app = create_app(ServerConfig(schema_dir="./schemas"))
    >>> # Run with: uvicorn.run(app, port=9002)
"""

import asyncio
import json
import logging
from importlib import resources

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from jinja2 import Environment, PackageLoader, select_autoescape
from pydantic import ValidationError

from .core.composer import SchemaComposer
from .core.config import ServerConfig
from .core.errors import (
    CompositionError,
    EditDisabledError,
    InvalidSchemaNameError,
    SchemaNotFoundError,
    StorageError,
)
from .core.models import GraphQLRequest, UserIDL
from .core.persistence import PersistenceService
from .core.resolution import SchemaResolver
from .core.store import IDLStore

logger = logging.getLogger(__name__)


def load_default_schema() -> str:
    """Read the sample schema used to seed the default slot."""
    return resources.files("gql_faker").joinpath("schemas", "default.graphql").read_text(encoding="utf-8")


def create_app(config: ServerConfig | None = None, composer: SchemaComposer | None = None) -> FastAPI:
    """Build the application from an explicit configuration."""
    config = config or ServerConfig()
    composer = composer or SchemaComposer()

    store = IDLStore(config.schema_dir)
    store.seed_default(load_default_schema())
    resolver = SchemaResolver(store, composer, config.forward_headers)
    persistence = PersistenceService(store, edit_mode=config.edit_mode)
    templates = Environment(
        loader=PackageLoader("gql_faker", "templates"),
        autoescape=select_autoescape(["html", "html.j2"]),
    )

    app = FastAPI(title="gql-faker", docs_url=None, redoc_url=None)
    app.state.config = config
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.cors_origin] if config.cors_origin else [],
        # Without an explicit origin the request's Origin is echoed back.
        allow_origin_regex=None if config.cors_origin else ".*",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(SchemaNotFoundError)
    async def schema_not_found(_request: Request, exc: SchemaNotFoundError):
        return JSONResponse(status_code=404, content={"error": exc.message})

    @app.exception_handler(InvalidSchemaNameError)
    async def invalid_schema_name(_request: Request, exc: InvalidSchemaNameError):
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(CompositionError)
    async def composition_failed(_request: Request, exc: CompositionError):
        logger.error("Stored schema does not compose: %s", exc.message)
        return JSONResponse(status_code=500, content={"errors": [{"message": exc.message}]})

    @app.exception_handler(StorageError)
    async def storage_failed(_request: Request, exc: StorageError):
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.get("/user-idl")
    @app.get("/user-idl/")
    @app.get("/user-idl/{schema_name}")
    def get_user_idl(schema_name: str | None = None):
        payload = UserIDL(
            schema_idl=store.read(schema_name),
            edit_mode=None if config.edit_mode else False,
        )
        return payload.to_json()

    @app.post("/user-idl")
    @app.post("/user-idl/")
    @app.post("/user-idl/{schema_name}")
    async def post_user_idl(request: Request, schema_name: str | None = None):
        body = await request.body()
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as e:
            return PlainTextResponse(str(e), status_code=400)
        try:
            await asyncio.to_thread(persistence.save, schema_name, text)
        except EditDisabledError as e:
            return PlainTextResponse(e.message, status_code=400)
        except StorageError as e:
            logger.error("Failed to save schema %r: %s", schema_name or "default", e.message)
            return PlainTextResponse(e.message, status_code=500)
        return PlainTextResponse("ok")

    @app.get("/graphql")
    @app.post("/graphql")
    @app.get("/graphql/")
    @app.post("/graphql/")
    @app.get("/graphql/{schema_name}")
    @app.post("/graphql/{schema_name}")
    async def graphql_endpoint(request: Request, schema_name: str | None = None):
        try:
            if request.method == "GET":
                params = dict(request.query_params)
                if "variables" in params:
                    params["variables"] = json.loads(params["variables"])
            else:
                params = await request.json()
            graphql_request = GraphQLRequest.model_validate(params)
        except (ValueError, ValidationError) as e:
            return JSONResponse(status_code=400, content={"errors": [{"message": str(e)}]})

        result = await resolver.execute(schema_name, graphql_request, request.headers)
        status_code = 200 if result.data is not None else 400
        return JSONResponse(status_code=status_code, content=result.formatted)

    @app.get("/editor", response_class=HTMLResponse)
    @app.get("/editor/", response_class=HTMLResponse)
    @app.get("/editor/{schema_name}", response_class=HTMLResponse)
    async def editor(schema_name: str | None = None):
        template = templates.get_template("editor.html.j2")
        return template.render(
            schema_name=schema_name or "",
            edit_mode=config.edit_mode,
            fake_idl=composer.fake_definition,
        )

    return app
