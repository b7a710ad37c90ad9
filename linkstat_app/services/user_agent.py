"""
User-Agent parsing for click analytics.
"""

import logging
from typing import NamedTuple, Optional

from user_agents import parse as parse_user_agent

from linkstat_app.schemas.records import UNKNOWN


logger = logging.getLogger(__name__)


class ParsedUserAgent(NamedTuple):
    os: str
    device: str
    browser: str


UNKNOWN_AGENT = ParsedUserAgent(UNKNOWN, UNKNOWN, UNKNOWN)


def _label(family: Optional[str], version: Optional[str]) -> str:
    if not family or family == "Other":
        return UNKNOWN
    return f"{family} {version}".strip() if version else family


class UserAgentParser:
    """Turns a raw User-Agent header into os / device / browser labels"""

    def parse(self, raw: Optional[str]) -> ParsedUserAgent:
        if not raw:
            return UNKNOWN_AGENT

        try:
            agent = parse_user_agent(raw)
        except Exception as e:
            logger.debug("Could not parse user agent %r: %s", raw, e)
            return UNKNOWN_AGENT

        return ParsedUserAgent(
            os=_label(agent.os.family, agent.os.version_string),
            device=self._device_type(agent),
            browser=_label(agent.browser.family, agent.browser.version_string),
        )

    @staticmethod
    def _device_type(agent) -> str:
        if agent.is_bot:
            return "Bot"
        if agent.is_tablet:
            return "Tablet"
        if agent.is_mobile:
            return "Mobile"
        if agent.is_pc:
            return "Desktop"
        return UNKNOWN
