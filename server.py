"""
LEVO Dispatch Server

Serves the dispatch handlers over Google Sheets two ways:
- POST /exec with {"action": ..., ...} (the web-app contract the ERP front-end uses)
- MCP tools under /mcp
"""
import json
import sys
from typing import Any, Callable

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from env_loader import get_port
from sheets_client import get_sheets_client
from handlers.requests import RequestsHandler
from handlers.purchases import PurchasesHandler
from lib.input_parser import coerce_str, coerce_number
from lib.errors import bad_request, unexpected_failure

transport_security = TransportSecuritySettings(
    enable_dns_rebinding_protection=True,
    allowed_hosts=[
        "localhost:8080",
        "127.0.0.1:8080",
    ],
)

mcp = FastMCP("levo-dispatch", transport_security=transport_security)


def log(*a):
    print(*a, file=sys.stderr, flush=True)


def _guarded(op: str, call: Callable[[], dict]) -> dict:
    """Run a handler call, turning any escaped exception into an error envelope."""
    try:
        return call()
    except Exception as e:
        log("FAILED", op, repr(e))
        return unexpected_failure(op, str(e))


# ===== Requests Tools =====

@mcp.tool()
async def requests_separate(request_id: Any, quantity: Any, user: Any = None) -> dict:
    """Separa una cantidad de una solicitud pendiente.

    Argumentos:
    - request_id: ID de la solicitud (columna F de "Solicitudes").
    - quantity: cantidad a separar (número o texto numérico).
    - user: operador que realiza la separación (opcional).

    Crea una fila nueva con estado "separado". Si no queda pendiente,
    la solicitud original queda en 0 y pasa a "completado".
    """
    rid = coerce_str(request_id, ("request_id", "idSolicitud", "id"))
    qty = coerce_number(quantity, ("quantity", "cantidad"))
    operator = coerce_str(user, ("user", "usuario"))

    return _guarded(
        "requests.separate",
        lambda: RequestsHandler(get_sheets_client()).separate(rid, qty, operator),
    )


@mcp.tool()
async def requests_pending(limit: int | None = None) -> dict:
    """Solicitudes pendientes (todas las que no están "completado")."""
    return _guarded(
        "requests.pending",
        lambda: RequestsHandler(get_sheets_client()).list_pending(limit=limit),
    )


# ===== Purchases Tools =====

@mcp.tool()
async def purchases_by_provider(provider: Any) -> dict:
    """Productos comprados a un proveedor, uno por código.

    El nombre del proveedor se compara sin mayúsculas ni espacios externos.
    """
    name = coerce_str(provider, ("provider", "proveedor", "name"))

    return _guarded(
        "purchases.by_provider",
        lambda: PurchasesHandler(get_sheets_client()).products_by_provider(name),
    )


@mcp.tool()
async def tools_help() -> dict:
    """Herramientas disponibles y acciones del endpoint /exec."""
    tools = [
        {"name": "requests_separate", "action": "separateRequest", "desc": "Separar cantidad de una solicitud",
         "args": {"idSolicitud": "string", "cantidad": "number", "usuario": "string"}},
        {"name": "requests_pending", "action": "getDispatchRequests", "desc": "Solicitudes pendientes",
         "args": {"limit": "int"}},
        {"name": "purchases_by_provider", "action": "getProviderProducts", "desc": "Productos por proveedor",
         "args": {"provider": "string"}},
    ]
    return {"status": "success", "op": "tools.help", "data": {"tools": tools}}


# ===== Web App Actions =====

def _list_as_data(result: dict, key: str) -> dict:
    # The web-app front-end maps over `data` directly.
    if result.get("status") != "success":
        return result
    return {**result, "data": result["data"][key]}


def _separate_action(payload: dict) -> dict:
    handler = RequestsHandler(get_sheets_client())
    return handler.separate(
        coerce_str(payload.get("idSolicitud")),
        coerce_number(payload.get("cantidad")),
        coerce_str(payload.get("usuario")),
    )


def _pending_action(payload: dict) -> dict:
    limit = coerce_number(payload.get("limit"))
    handler = RequestsHandler(get_sheets_client())
    result = handler.list_pending(limit=int(limit) if limit else None)
    return _list_as_data(result, "requests")


def _provider_action(payload: dict) -> dict:
    handler = PurchasesHandler(get_sheets_client())
    result = handler.products_by_provider(coerce_str(payload.get("provider")))
    return _list_as_data(result, "products")


ACTIONS: dict[str, Callable[[dict], dict]] = {
    "separateRequest": _separate_action,
    "getDispatchRequests": _pending_action,
    "getProviderProducts": _provider_action,
}


def dispatch(payload: Any) -> dict:
    """Route a web-app payload to its action; never raises."""
    if not isinstance(payload, dict):
        return bad_request("exec", "payload must be a JSON object")

    action = payload.get("action")
    handler = ACTIONS.get(action) if isinstance(action, str) else None
    if handler is None:
        return bad_request("exec", f"unknown action: {action}")

    log("EXEC", action)
    result = _guarded(action, lambda: handler(payload))

    if result.get("status") != "success":
        log("EXEC ERROR", action, result.get("code"), result.get("message"))
    return result


async def exec_endpoint(request: Request) -> JSONResponse:
    # The front-end posts JSON as text/plain to avoid a CORS preflight.
    body = await request.body()
    try:
        payload = json.loads(body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return JSONResponse(bad_request("exec", "invalid JSON body"))
    return JSONResponse(dispatch(payload))


async def healthz(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


async def root(request: Request) -> JSONResponse:
    return JSONResponse(
        {"error": "Use POST /exec, /mcp for MCP, or /healthz for health check"},
        status_code=406,
    )


def create_app():
    """Combined ASGI app: /mcp goes to FastMCP, everything else to Starlette."""
    from contextlib import asynccontextmanager

    mcp_app = mcp.streamable_http_app()

    @asynccontextmanager
    async def lifespan(app):
        async with mcp.session_manager.run():
            yield

    starlette_app = Starlette(
        routes=[
            Route("/", root),
            Route("/healthz", healthz),
            Route("/exec", exec_endpoint, methods=["POST"]),
        ],
        lifespan=lifespan,
    )

    async def combined_app(scope, receive, send):
        path = scope.get("path", "/")
        if path.startswith("/mcp"):
            await mcp_app(scope, receive, send)
        else:
            await starlette_app(scope, receive, send)

    return combined_app


# ===== Server Entry Point =====

if __name__ == "__main__":
    import uvicorn

    port = get_port()
    log(f"Starting server on port {port}")
    uvicorn.run(create_app(), host="0.0.0.0", port=port, lifespan="on")
