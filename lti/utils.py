#
# Copyright 2025 EDT&Partners
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#

from types import MappingProxyType
from typing import Iterator, Mapping, Optional
from urllib.parse import urlencode, urlparse
from fastapi import Request
from logging_config import setup_logging
from lti.config import LaunchParameters

# Configure logging
logger = setup_logging(module_name='lti_utils')


class LaunchRequest(Mapping):
    """Read-only view of the parameters of one launch request"""

    def __init__(self, params: Mapping[str, str]):
        self._params = MappingProxyType({k: v for k, v in params.items() if isinstance(v, str)})

    def __getitem__(self, name: str) -> str:
        return self._params[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def get_param(self, name: str) -> Optional[str]:
        """Get a launch parameter, or None if it was not sent"""
        return self._params.get(name)

    @property
    def user_id(self) -> Optional[str]:
        return self.get_param(LaunchParameters.USER_ID)

    @property
    def resource_link_id(self) -> Optional[str]:
        return self.get_param(LaunchParameters.RESOURCE_LINK_ID)

    @property
    def consumer_key(self) -> Optional[str]:
        return self.get_param(LaunchParameters.CONSUMER_KEY)

    @property
    def locale(self) -> Optional[str]:
        return self.get_param(LaunchParameters.LOCALE)

    @property
    def roles(self) -> Optional[str]:
        return self.get_param(LaunchParameters.ROLES)

    @property
    def return_url(self) -> Optional[str]:
        """The consumer's fallback URL, or None if absent or blank"""
        return_url = self.get_param(LaunchParameters.RETURN_URL)
        if return_url is None or not return_url.strip():
            return None
        return return_url


async def get_form_data(request: Request) -> dict:
    """Cache and return form data from request"""
    if not hasattr(request.state, 'cached_form_data'):
        try:
            form_data = await request.form()
            # A repeated parameter keeps its first value
            request.state.cached_form_data = {key: form_data.getlist(key)[0] for key in form_data.keys()}
            logger.info(f"Retrieved form data: {list(request.state.cached_form_data.keys())}")
        except Exception as e:
            logger.error(f"Error getting form data: {str(e)}")
            request.state.cached_form_data = {}
    return request.state.cached_form_data


def build_redirect_url(base_url: str, params: dict) -> str:
    """Build a proper redirect URL with query parameters"""
    parsed = urlparse(base_url)
    if not parsed.scheme or not parsed.netloc:
        logger.error(f"Invalid base URL: {base_url}")
        raise ValueError(f"Invalid base URL: {base_url}")

    # Build query string, filtering out None values
    query = urlencode({k: v for k, v in params.items() if v is not None})
    if not query:
        return base_url

    separator = '&' if '?' in base_url else '?'
    return f"{base_url}{separator}{query}"


def normalize_ampersands(url: str) -> str:
    """Turn HTML-escaped ampersands back into plain ones"""
    return url.replace("&amp;", "&")
