"""
HTTP Package
Sanic-facing helpers for API repositories
"""
from larasanic_api.http.request_parameters import parameters_from_request

__all__ = [
    'parameters_from_request',
]
