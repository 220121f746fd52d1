"""HTTP middleware: request ID.

Applied in main app; order matters (first added = outermost).
"""

from clinic_access.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
