from functools import wraps
from flask import g
from sitecms.auth.identity import current_actor
from sitecms.store.documents import get_store


def store_required(fn):
    """
    Resolve the document store and the (optional) acting identity before
    the view runs. Raises BackendUnavailable when the store is not set up.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        g.store = get_store()
        g.current_actor = current_actor()
        return fn(*args, **kwargs)
    return wrapper
