"""
Audit trail for authentication events.

There is no schema behind this core, so events go to the
``accounts.audit`` logger as one structured record each.  Passwords and
tokens are never part of ``detail``.
"""
import logging
from typing import Any, Dict, Optional

from django.utils import timezone

logger = logging.getLogger("accounts.audit")


def log_action(*, username: Optional[str], action: str, result: str, ip: Optional[str] = None,
               detail: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    event = {
        'time': timezone.now().isoformat(),
        'action': action,
        'result': result,
        'username': username,
        'ip': ip,
        'detail': detail or {},
    }
    level = logging.INFO if result == 'ok' else logging.WARNING
    logger.log(level, "%s %s user=%s ip=%s", action, result, username or '-', ip or '-', extra={'audit': event})
    return event


def client_ip(request) -> Optional[str]:
    return request.META.get('REMOTE_ADDR')
