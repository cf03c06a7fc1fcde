from fastapi import Request, Response
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET",
    "Access-Control-Allow-Headers": "Content-Type",
}


async def add_cors_headers(request: Request, call_next) -> Response:
    """所有回應都加上 CORS header；OPTIONS preflight 直接回 200。"""
    if request.method == "OPTIONS":
        response = Response(status_code=200)
    else:
        response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


async def plain_text_http_error(request: Request, exc: StarletteHTTPException) -> Response:
    """錯誤一律以純文字回應，不帶內部路徑。"""
    detail = "Method not allowed" if exc.status_code == 405 else str(exc.detail)
    return PlainTextResponse(detail, status_code=exc.status_code, headers=exc.headers)
