"""
Shared module for common utilities across REST API and WS Gateway.

STRUCTURE:
- shared.security: Authentication, authorization, rate limiting
  - auth.py: JWT signing/verification, current_user_context, require_admin
  - password.py: Bcrypt hashing
  - rate_limit.py: slowapi limiter for public write endpoints

- shared.infrastructure: Database and request plumbing
  - db.py: SQLAlchemy sessions, safe_commit()
  - correlation.py: X-Request-ID middleware and log filter

- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: Roles, OrderStatus, ORDER_TRANSITIONS

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - schemas.py: Pydantic request/response schemas (camelCase on the wire)

IMPORT EXAMPLES:
    from shared.security.auth import verify_jwt, current_user_context
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import Roles, OrderStatus
    from shared.utils.exceptions import NotFoundError, ForbiddenError
"""
