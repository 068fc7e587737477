# record_portal/core/context.py

import contextvars

correlation_id_ctx = contextvars.ContextVar("correlation_id", default=None)
agent_id_ctx = contextvars.ContextVar("agent_id", default=None)
