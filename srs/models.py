from .data.models import ReviewRecord, SrsItem  # noqa: F401
