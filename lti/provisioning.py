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

from typing import Optional, Tuple

from database.models import WidgetInstance
from logging_config import setup_logging
from lti.repository import WidgetRepository

# Configure logging
logger = setup_logging(module_name='lti_provisioning')


def resolve_widget(repository: WidgetRepository, widget_id: Optional[str]) -> Optional[str]:
    """
    Translate the widget id from the launch URL into the widget's internal guid.

    Returns:
        Optional[str]: The guid of the widget, or None if no match is found
    """
    if not widget_id:
        return None
    widget_guid = repository.find_widget_guid(widget_id)
    if widget_guid is None:
        logger.warning(f"No widget registered under id {widget_id}")
    return widget_guid


def provision_instance(
    repository: WidgetRepository,
    api_key: str,
    user_id: str,
    shared_data_key: str,
    widget_guid: str,
    locale: Optional[str] = None
) -> Tuple[Optional[WidgetInstance], bool]:
    """
    Find the instance for (api_key, user_id, shared_data_key, widget_guid), creating it if needed.

    The lookup always runs before creation. Concurrent launches for the same tuple are
    deduplicated by the repository, not here.

    Returns:
        Tuple[Optional[WidgetInstance], bool]: The instance (None if it could not be created)
        and whether it was created by this call
    """
    instance = repository.find_instance(api_key, user_id, shared_data_key, widget_guid)
    if instance is not None:
        logger.info(f"Found existing instance for widget {widget_guid} and user {user_id}")
        return instance, False

    logger.info(f"No instance for widget {widget_guid} and user {user_id}, creating one")
    instance = repository.create_instance(api_key, user_id, shared_data_key, widget_guid, locale)
    if instance is None:
        logger.error(f"Widget {widget_guid} could not be instantiated")
        return None, False
    return instance, True
