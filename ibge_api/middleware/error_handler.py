from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import traceback
import logging
import hashlib
import time
from typing import Dict, Any, List, Optional

from ibge_api.services.errors import ServiceError, ValidationError

# Criar um logger específico para o middleware
logger = logging.getLogger("ibge_api.middleware.error_handler")


class ErrorDetail:
    """Classe para detalhes de erro padronizados."""

    def __init__(
        self,
        status_code: int,
        message: str,
        error_type: str,
        stack_trace: Optional[str] = None,
        details: Optional[Any] = None
    ):
        self.status_code = status_code
        self.message = message
        self.error_type = error_type
        self.stack_trace = stack_trace
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        """Converte o erro para um dicionário."""
        error_dict = {
            "status_code": self.status_code,
            "message": self.message,
            "error_type": self.error_type
        }

        if self.stack_trace:
            error_dict["stack_trace"] = self.stack_trace

        if self.details:
            error_dict["details"] = self.details

        return error_dict


def _error_id(request: Request) -> str:
    return hashlib.md5(f"{time.time()}-{request.url.path}".encode()).hexdigest()[:8]


def format_stack_trace(stack_trace: str) -> str:
    """Formata o stack trace para ser mais legível no log."""
    formatted_lines = []
    for line in stack_trace.split('\n'):
        if line.strip():
            formatted_lines.append(f"  │ {line}")

    return "\n".join(formatted_lines)


def request_errors_by_field(errors: List[Dict[str, Any]]) -> Dict[str, List[str]]:
    """
    Agrupa os erros de validação do FastAPI por campo.

    ``loc`` vem como ("body", "city") ou ("path", "ibge"); o primeiro
    elemento é descartado. Um corpo inválido como um todo fica sob "body".
    """
    grouped: Dict[str, List[str]] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        field = ".".join(loc[1:]) if len(loc) > 1 else (loc[0] if loc else "body")
        grouped.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return grouped


def setup_error_handlers(app, debug: bool = False):
    """
    Configura o tratamento de erros para a aplicação FastAPI.

    Todas as respostas de erro usam o mesmo envelope ``ErrorDetail``.
    """
    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        """Handler para erros da camada de serviço."""
        details = exc.errors if isinstance(exc, ValidationError) else None
        logger.warning(
            f"⚠️ SVC#{_error_id(request)}: {request.method} {request.url.path} - "
            f"{exc.status_code} - {exc.error_type}: {exc.message}"
        )

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorDetail(
                status_code=exc.status_code,
                message=exc.message,
                error_type=exc.error_type,
                details=details
            ).to_dict()
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handler para exceções HTTP."""
        logger.warning(f"⚠️ HTTP#{_error_id(request)}: {exc.status_code} - {exc.detail}")

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorDetail(
                status_code=exc.status_code,
                message=str(exc.detail),
                error_type="http_exception"
            ).to_dict(),
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handler para erros de validação do formato da requisição."""
        details = request_errors_by_field(exc.errors())
        logger.warning(
            f"⚠️ VALID#{_error_id(request)}: Erro de validação em "
            f"{request.method} {request.url.path}: {details}"
        )

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorDetail(
                status_code=status.HTTP_400_BAD_REQUEST,
                message="One or more validation errors occurred.",
                error_type="validation_error",
                details=details
            ).to_dict()
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Handler para exceções genéricas não tratadas."""
        stack_trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

        error_msg = f"❌ EXC#{_error_id(request)}: {request.method} {request.url.path} - {exc.__class__.__name__}: {str(exc)}"
        logger.error(f"{error_msg}\n╭─ Stack Trace ─────────────────────────╮\n{format_stack_trace(stack_trace)}\n╰───────────────────────────────────────╯")

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorDetail(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                message=str(exc),
                error_type=exc.__class__.__name__,
                stack_trace=stack_trace if debug else None
            ).to_dict()
        )
