"""
figma → read-only resource server
FastAPI app exposing Figma files, nodes, comments, versions, components,
styles and variables as figma:///file/... resources.
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request

from errors import (
    FigmaResourceError,
    InvalidAddressError,
    ResourceAccessDeniedError,
    ResourceNotFoundError,
    TransportError,
    UnsupportedCategoryError,
)
from models import GetFileRequest, GetNodeRequest, WatchRequest
from Services.figma_service import FigmaClient, load_figma_token
from Services.json_text import dumps_indented
from Services.log_stream import LogStream
from Services.resource_gateway import FigmaResourceHandler

SERVER_NAME = "figma-readonly-server"
SERVER_VERSION = "1.0.0"

_STATUS_BY_ERROR = (
    (InvalidAddressError, 400),
    (UnsupportedCategoryError, 400),
    (ResourceNotFoundError, 404),
    (ResourceAccessDeniedError, 403),
    (TransportError, 502),
)


def _to_http_error(e: FigmaResourceError) -> HTTPException:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(e, error_type):
            return HTTPException(status_code=status, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))


def _text_content(payload) -> dict:
    return {"content": [{"type": "text", "text": dumps_indented(payload)}]}


def get_handler(request: Request) -> FigmaResourceHandler:
    return request.app.state.handler


def create_app(handler: Optional[FigmaResourceHandler] = None, log_path: Optional[str] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        stream = LogStream(log_path)
        log = stream.open()
        log.info("Starting Figma resource server...")
        try:
            if handler is None:
                client = FigmaClient(load_figma_token(), logger=log)
                app.state.handler = FigmaResourceHandler(client, logger=log)
            else:
                app.state.handler = handler
            app.state.log = log
            log.info("Server started successfully")
            yield
            log.info("Shutting down server...")
        except Exception:
            log.exception("Fatal error in server lifecycle")
            raise
        finally:
            stream.close()

    app = FastAPI(title=SERVER_NAME, version=SERVER_VERSION, lifespan=lifespan)

    @app.get("/")
    def root():
        return {"message": f"{SERVER_NAME} running"}

    # -------- resources --------

    @app.get("/resources")
    def list_resources(handler: FigmaResourceHandler = Depends(get_handler)):
        try:
            entries = handler.list()
        except FigmaResourceError as e:
            raise _to_http_error(e)
        return [entry.model_dump(by_alias=True, exclude_none=True) for entry in entries]

    @app.get("/resources/read")
    def read_resource(uri: str, handler: FigmaResourceHandler = Depends(get_handler)):
        try:
            contents = handler.read(uri)
        except FigmaResourceError as e:
            raise _to_http_error(e)
        return {"contents": [c.model_dump(by_alias=True) for c in contents]}

    @app.get("/resources/search")
    def search_resources(query: str, handler: FigmaResourceHandler = Depends(get_handler)):
        try:
            entries = handler.search(query)
        except FigmaResourceError as e:
            raise _to_http_error(e)
        return [entry.model_dump(by_alias=True, exclude_none=True) for entry in entries]

    @app.post("/resources/watch")
    def watch_resource(req: WatchRequest, handler: FigmaResourceHandler = Depends(get_handler)):
        try:
            handler.watch(req.uri)
        except FigmaResourceError as e:
            raise _to_http_error(e)
        return {"uri": req.uri, "status": "ok"}

    # -------- tools (raw, unnormalized) --------

    @app.post("/tools/get-file")
    def get_file(req: GetFileRequest, request: Request, handler: FigmaResourceHandler = Depends(get_handler)):
        log = request.app.state.log
        log.info("Fetching file %s", req.file_key)
        try:
            data = handler.client.get_file(req.file_key)
        except FigmaResourceError as e:
            raise _to_http_error(e)
        log.info("Got file data name=%s version=%s", data.get("name"), data.get("version"))
        return _text_content(
            {
                "name": data.get("name"),
                "key": req.file_key,
                "version": data.get("version"),
                "document": data.get("document"),
            }
        )

    @app.post("/tools/get-node")
    def get_node(req: GetNodeRequest, request: Request, handler: FigmaResourceHandler = Depends(get_handler)):
        request.app.state.log.info("Fetching node %s in %s", req.node_id, req.file_key)
        try:
            data = handler.client.get_file_nodes(req.file_key, req.node_id)
        except FigmaResourceError as e:
            raise _to_http_error(e)
        return _text_content(data)

    return app


app = create_app()
