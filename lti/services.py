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

from fastapi import status
from fastapi.responses import Response

from constants import INTERNAL_SERVER_ERROR_MESSAGE, INSTANCE_NOT_FOUND_MESSAGE, WIDGET_NOT_FOUND_MESSAGE
from logging_config import setup_logging
from lti.auth import LaunchVerifier
from lti.keys import derive_session_key
from lti.participants import register_participant
from lti.preferences import grant_moderator, project_preferences
from lti.provisioning import provision_instance, resolve_widget
from lti.repository import WidgetRepository
from lti.responder import LaunchResponder
from lti.roles import is_moderator
from lti.urls import InstanceUrlBuilder
from lti.utils import LaunchRequest
from utility.exceptions import (
    LaunchError,
    MissingRequiredParameterError,
    RedirectConstructionError,
    WidgetOrInstanceNotFoundError,
)

# Configure logging
logger = setup_logging(module_name='lti_services')


def handle_launch(
    launch_request: LaunchRequest,
    widget_id: str,
    repository: WidgetRepository,
    url_builder: InstanceUrlBuilder,
    verifier: Optional[LaunchVerifier] = None
) -> Response:
    """
    Process one Basic LTI launch and redirect the browser to the widget instance.

    Every failure, including unexpected errors from the repository or the verifier, ends in
    LaunchResponder.error, which prefers the consumer's return URL over a bare status code. Nothing is retried.
    """
    responder = LaunchResponder(launch_request)
    try:
        if verifier is not None:
            verifier.verify(launch_request, widget_id)

        user_id = launch_request.user_id
        resource_link_id = launch_request.resource_link_id
        # The consumer key is used as an opaque token, see lti.auth
        token = launch_request.consumer_key or ""

        widget_guid = resolve_widget(repository, widget_id)
        shared_data_key = derive_session_key(token, widget_guid, resource_link_id)

        if not user_id or not resource_link_id:
            logger.warning(f"Launch for widget {widget_id} is missing user_id or resource_link_id")
            raise MissingRequiredParameterError()
        if widget_guid is None:
            raise WidgetOrInstanceNotFoundError(WIDGET_NOT_FOUND_MESSAGE)

        instance, created = provision_instance(
            repository, token, user_id, shared_data_key, widget_guid, launch_request.locale
        )
        if instance is None:
            raise WidgetOrInstanceNotFoundError(INSTANCE_NOT_FOUND_MESSAGE)

        register_participant(repository, instance, user_id, launch_request)

        if is_moderator(launch_request.roles):
            logger.info(f"User {user_id} launched widget {widget_guid} as moderator")
            grant_moderator(repository, instance)

        project_preferences(repository, instance, launch_request)

        try:
            instance_url = url_builder.get_url(instance)
            return responder.success(instance_url, created)
        except Exception as e:
            logger.error(f"Error building instance URL: {str(e)}")
            raise RedirectConstructionError() from e

    except LaunchError as e:
        logger.warning(f"Launch for widget {widget_id} failed with {e.status_code}: {e.message}")
        return responder.error(e.status_code, e.message)
    except Exception as e:
        logger.error(f"Launch for widget {widget_id} failed unexpectedly: {type(e).__name__}: {str(e)}")
        return responder.error(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_SERVER_ERROR_MESSAGE)
