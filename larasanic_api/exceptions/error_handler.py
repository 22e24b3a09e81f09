"""
Error Handler
Turns exceptions raised by repositories and generators into JSON responses
"""
import traceback
from typing import Any, Dict, Optional

from sanic import Request
from sanic.exceptions import SanicException
from sanic.response import json as json_response

from larasanic_api.logging import getLogger

GENERIC_MESSAGE = "An error occurred while processing your request"


class ErrorHandler:
    """
    JSON error responses for a Sanic app

    Body shape:
        {"success": false, "error": {"type": ..., "message": ..., "errors": {...}}}

    'errors' appears only for exceptions that carry per-field messages
    (ValidationException). With debug on, unexpected exceptions show
    their own message and the body gains a 'debug' block describing the
    request; include_trace adds the traceback.

    Example:
        app = Sanic('api')
        ErrorHandler(debug=app.config.DEBUG).install(app)
    """

    def __init__(self, debug: bool = False, include_trace: bool = False):
        self.debug = debug
        self.include_trace = include_trace and debug
        self.logger = getLogger('larasanic_api.errors')

    def install(self, app, *exceptions):
        """
        Register handle_error on the app

        Args:
            app: Sanic application
            *exceptions: Exception classes to handle (default: FrameworkException)
        """
        from larasanic_api.exceptions.custom import FrameworkException

        app.exception(*(exceptions or (FrameworkException,)))(self.handle_error)
        return app

    async def handle_error(self, request: Request, error: Exception):
        status_code = self.status_for(error)
        self._report(error, request, status_code)

        return json_response(self.render(error, request), status=status_code)

    def render(self, error: Exception, request: Optional[Request] = None) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            'type': type(error).__name__,
            'message': self.message_for(error),
        }

        errors = getattr(error, 'errors', None)
        if errors:
            body['errors'] = errors

        if self.include_trace:
            body['trace'] = traceback.format_exception(type(error), error, error.__traceback__)

        response = {'success': False, 'error': body}

        if self.debug and request is not None:
            response['debug'] = {
                'method': request.method,
                'path': request.path,
                'url': str(request.url),
            }

        return response

    def message_for(self, error: Exception) -> str:
        # Package and Sanic exceptions carry messages meant for clients
        if isinstance(error, SanicException):
            return str(error)

        message = getattr(error, 'message', None)
        if message is not None:
            return message

        return str(error) if self.debug else GENERIC_MESSAGE

    @staticmethod
    def status_for(error: Exception) -> int:
        return getattr(error, 'status_code', None) or 500

    def _report(self, error: Exception, request: Optional[Request], status_code: int):
        context = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'status_code': status_code,
            'method': getattr(request, 'method', None),
            'path': getattr(request, 'path', None),
        }
        summary = f"{status_code} {type(error).__name__} on {context['method']} {context['path']}"

        if status_code >= 500:
            self.logger.error(summary, extra=context, exc_info=error)
        else:
            self.logger.warning(summary, extra=context)
