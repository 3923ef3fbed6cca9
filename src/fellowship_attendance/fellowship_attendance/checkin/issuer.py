from __future__ import annotations

import base64
import logging
from dataclasses import dataclass

from ..common.validators import require_non_empty
from ..core.constants import CHECK_IN_PATH
from ..core.exceptions import NotFoundError, RenderError
from ..sessions.repository import SessionRepository
from .renderer import QRRenderer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckInToken:
    session_id: str
    url: str
    image: bytes
    mime_type: str

    def as_data_url(self) -> str:
        encoded = base64.b64encode(self.image).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


class CheckInTokenIssuer:
    """Builds the static check-in deep link for a session and renders it as a QR code.

    The link is not a credential: the check-in itself is authenticated by the
    caller's own session.
    """

    def __init__(self, sessions: SessionRepository, renderer: QRRenderer, *, frontend_url: str):
        self._sessions = sessions
        self._renderer = renderer
        self._frontend_url = require_non_empty(frontend_url, "frontend_url").rstrip("/")

    def build_check_in_url(self, session_id: str) -> str:
        return f"{self._frontend_url}{CHECK_IN_PATH}/{session_id}"

    def issue(self, session_id: str) -> CheckInToken:
        if not self._sessions.get_by_id(session_id):
            raise NotFoundError("Session", session_id)

        url = self.build_check_in_url(session_id)
        try:
            image = self._renderer.render(url)
        except Exception as e:
            logger.warning("QR render failed for session=%s: %s", session_id, e)
            raise RenderError("Failed to generate QR code") from e

        return CheckInToken(session_id=session_id, url=url, image=image, mime_type=self._renderer.mime_type)
