# resident_directory/core/context.py

import contextvars

correlation_id_ctx = contextvars.ContextVar("correlation_id", default=None)
