from functools import wraps

from rest_framework.response import Response

from .errors import SwapError


def api_errors(view):
    """Turn SwapError subclasses raised by a function view into the JSON error envelope."""
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except SwapError as e:
            return Response(e.as_dict(), status=e.status_code)
    return wrapper
