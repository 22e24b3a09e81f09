"""
Request Parameters
Builds repository parameter maps from Sanic requests
"""
from typing import Dict, Iterable, Optional

from sanic import Request

from larasanic_api.repositories.parameters import RepositoryParameters


def parameters_from_request(request: Request, keys: Optional[Iterable[str]] = None) -> Dict[str, str]:
    """
    Query string arguments as a parameter map (first value per key)

    Blank values are kept so a bare "?all" still counts as present.

    Args:
        request: Sanic request
        keys: Keys to keep (default: the keys repositories recognize)

    Example:
        # GET /books?ids=1,2&include=author&page=2
        page = await BookRepository().paginate(
            parameters=parameters_from_request(request)
        )
    """
    wanted = set(RepositoryParameters.KEYS if keys is None else keys)
    args = request.get_args(keep_blank_values=True)

    return {
        key: args.get(key)
        for key in args
        if key in wanted
    }
