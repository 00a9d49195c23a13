from .errors import InsortError, NotFoundError, UndecodableError
from .models import CreationPolicy, ReconcileReport
from .normalize import reconcile

__version__ = "0.1.0"

__all__ = [
    "CreationPolicy",
    "InsortError",
    "NotFoundError",
    "ReconcileReport",
    "UndecodableError",
    "reconcile",
    "__version__",
]
