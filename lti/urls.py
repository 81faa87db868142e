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

from typing import Optional
from urllib.parse import quote

from fastapi import Request

from constants import DEFAULT_START_FILE
from database.models import WidgetInstance
from logging_config import setup_logging
from lti.config import WidgetServerConfig
from lti.utils import build_redirect_url

# Configure logging
logger = setup_logging(module_name='lti_urls')


class InstanceUrlBuilder:
    """Builds the URL a browser uses to open a running widget instance"""

    def __init__(self, base_url: str, proxy_url: Optional[str] = None):
        self.base_url = base_url.rstrip('/')
        self.proxy_url = proxy_url

    def get_start_url(self, instance: WidgetInstance) -> str:
        widget = instance.widget
        if widget.start_url:
            return widget.start_url
        return f"{self.base_url}/widgets/{quote(widget.id, safe='')}/{DEFAULT_START_FILE}"

    def get_url(self, instance: WidgetInstance) -> str:
        params = {
            "idkey": instance.id_key,
            "lang": instance.lang,
            "proxy": self.proxy_url,
        }
        url = build_redirect_url(self.get_start_url(instance), params)
        logger.info(f"Built instance URL for instance {instance.id}")
        return url


def get_instance_url_builder(request: Request) -> InstanceUrlBuilder:
    """Use WIDGET_BASE_URL when configured, otherwise the URL the launch arrived on"""
    base_url = WidgetServerConfig.get_widget_base_url() or str(request.base_url)
    return InstanceUrlBuilder(base_url, proxy_url=WidgetServerConfig.get_proxy_url())
