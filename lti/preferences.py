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

from typing import Iterable, List, Optional, Set

from constants import MODERATOR_PREFERENCE, MODERATOR_PREFERENCE_VALUE
from database.models import WidgetInstance
from logging_config import setup_logging
from lti.config import LaunchConfig
from lti.repository import WidgetRepository
from lti.utils import LaunchRequest

# Configure logging
logger = setup_logging(module_name='lti_preferences')


def set_preference(
    repository: WidgetRepository,
    instance: WidgetInstance,
    name: str,
    value: str,
    declared: Optional[Set[str]] = None
) -> bool:
    """
    Set a preference only if the instance already declares it.

    Args:
        repository: Persistence for the instance
        instance: The widget instance
        name: Preference key
        value: New value
        declared: Declared preference keys, if already loaded

    Returns:
        bool: True if the preference was written
    """
    if declared is None:
        declared = repository.get_preference_keys(instance)
    if name not in declared:
        return False
    repository.update_preference(instance, name, value)
    return True


def project_preferences(
    repository: WidgetRepository,
    instance: WidgetInstance,
    launch_request: LaunchRequest,
    parameter_names: Iterable[str] = LaunchConfig.PREFERENCE_PARAMETERS
) -> List[str]:
    """Copy whitelisted launch parameters onto the preferences the instance declares"""
    declared = repository.get_preference_keys(instance)
    written = []
    for name in parameter_names:
        value = launch_request.get_param(name)
        if value is None:
            continue
        if set_preference(repository, instance, name, value, declared=declared):
            written.append(name)
    if written:
        logger.info(f"Projected launch parameters onto preferences: {written}")
    return written


def grant_moderator(repository: WidgetRepository, instance: WidgetInstance) -> bool:
    """Mark the instance's user as moderator, if the widget supports the moderator preference"""
    # TODO: set the participant host flag once participants carry roles
    granted = set_preference(repository, instance, MODERATOR_PREFERENCE, MODERATOR_PREFERENCE_VALUE)
    if not granted:
        logger.debug(f"Instance {instance.id} does not declare the {MODERATOR_PREFERENCE} preference")
    return granted
