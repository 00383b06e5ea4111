"""
MailerLite Client
=================

Reads group details from the MailerLite v2 API. Every course has its own
MailerLite account, so the API key is passed per call.
"""

import logging
from typing import Any, Dict
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)

API_KEY_HEADER = 'X-MailerLite-ApiKey'


class ProviderError(Exception):
    """Fetching a group from MailerLite failed (network, status or body)"""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class MailerLiteClient:
    """Minimal MailerLite API client: group details and active subscriber count"""

    def __init__(self, base_url: str = 'https://api.mailerlite.com/api/v2', timeout: float = 10):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    def group_url(self, group_id: str) -> str:
        return f"{self.base_url}/groups/{quote(str(group_id), safe='')}"

    def get_group(self, group_id: str, api_key: str) -> Dict[str, Any]:
        """
        Fetch one group's details

        Raises:
            ProviderError: on network errors, timeouts, non-2xx status or a non-JSON body
        """
        url = self.group_url(group_id)
        try:
            response = requests.get(
                url,
                headers={API_KEY_HEADER: api_key, 'Accept': 'application/json'},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ProviderError(f"Request to MailerLite failed: {e}") from e

        if not response.ok:
            raise ProviderError(f"HTTP {response.status_code}", status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError("MailerLite returned a non-JSON body", status_code=response.status_code) from e

        if not isinstance(data, dict):
            raise ProviderError("MailerLite returned an unexpected body", status_code=response.status_code)
        return data

    def get_active_count(self, group_id: str, api_key: str) -> int:
        """Number of active subscribers in a group (0 when MailerLite omits it)"""
        data = self.get_group(group_id, api_key)
        active = data.get('active')
        if active is None:
            return 0
        # bool is an int subclass
        if isinstance(active, bool):
            raise ProviderError(f"Invalid active count: {active!r}")
        try:
            count = int(active)
        except (TypeError, ValueError, OverflowError) as e:
            raise ProviderError(f"Invalid active count: {active!r}") from e
        if count < 0 or (isinstance(active, float) and active != count):
            raise ProviderError(f"Invalid active count: {active!r}")
        return count
