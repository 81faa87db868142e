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

from unittest.mock import MagicMock
import pytest
from fastapi import HTTPException
from sqlalchemy.exc import OperationalError
from lti.auth import ConsumerKeyVerifier, LaunchVerifier
from lti.keys import derive_session_key
from lti.services import handle_launch
from lti.urls import InstanceUrlBuilder
from lti.utils import LaunchRequest
from utility.exceptions import LaunchAuthenticationError

GUID = "http://widgets.example.com/w1"
RETURN_URL = "https://lms.example.com/return"

@pytest.fixture
def url_builder():
    return InstanceUrlBuilder("https://widgets.example.com")

def launch_params(**overrides):
    params = {
        "user_id": "user-1",
        "resource_link_id": "link-1",
        "oauth_consumer_key": "consumer",
        "launch_presentation_locale": "en",
        "lis_person_name_full": "Ada Lovelace",
        "context_title": "Physics",
    }
    params.update(overrides)
    return LaunchRequest({k: v for k, v in params.items() if v is not None})

class RejectingVerifier(LaunchVerifier):
    def verify(self, launch_request, widget_id):
        raise LaunchAuthenticationError()

def test_first_launch_creates_instance(widget_repository, url_builder):
    response = handle_launch(launch_params(), "w1", widget_repository, url_builder, ConsumerKeyVerifier())

    assert response.status_code == 201
    assert response.headers["location"] == "https://widgets.example.com/widgets/w1/index.html?idkey=idkey-1&lang=en"

    instance = widget_repository.instances[0]
    assert instance.api_key == "consumer"
    assert instance.user_id == "user-1"
    assert instance.shared_data_key == derive_session_key("consumer", GUID, "link-1")
    assert instance.participants["user-1"].display_name == "Ada Lovelace"
    assert instance.preferences["context_title"] == "Physics"
    assert instance.preferences["moderator"] == "false"

def test_repeat_launch_reuses_instance(widget_repository, url_builder):
    first = handle_launch(launch_params(), "w1", widget_repository, url_builder)
    second = handle_launch(launch_params(context_title="Chemistry"), "w1", widget_repository, url_builder)

    assert first.status_code == 201
    assert second.status_code == 200
    assert first.headers["location"] == second.headers["location"]
    assert len(widget_repository.instances) == 1
    assert widget_repository.instances[0].preferences["context_title"] == "Chemistry"

def test_other_resource_link_gets_new_instance(widget_repository, url_builder):
    handle_launch(launch_params(), "w1", widget_repository, url_builder)
    response = handle_launch(launch_params(resource_link_id="link-2"), "w1", widget_repository, url_builder)

    assert response.status_code == 201
    assert len(widget_repository.instances) == 2

def test_missing_consumer_key_uses_empty_token(widget_repository, url_builder):
    response = handle_launch(launch_params(oauth_consumer_key=None), "w1", widget_repository, url_builder)

    assert response.status_code == 201
    assert widget_repository.instances[0].api_key == ""

def test_instructor_is_granted_moderator(widget_repository, url_builder):
    handle_launch(launch_params(roles="Instructor"), "w1", widget_repository, url_builder)
    assert widget_repository.instances[0].preferences["moderator"] == "true"

def test_learner_is_not_granted_moderator(widget_repository, url_builder):
    handle_launch(launch_params(roles="Learner"), "w1", widget_repository, url_builder)
    assert widget_repository.instances[0].preferences["moderator"] == "false"

@pytest.mark.parametrize("missing", ["user_id", "resource_link_id"])
def test_missing_required_parameter(widget_repository, url_builder, missing):
    with pytest.raises(HTTPException) as exc_info:
        handle_launch(launch_params(**{missing: None}), "w1", widget_repository, url_builder)
    assert exc_info.value.status_code == 500
    assert widget_repository.create_calls == 0

def test_missing_required_parameter_redirects_to_return_url(widget_repository, url_builder):
    params = launch_params(user_id=None, launch_presentation_return_url=RETURN_URL)
    response = handle_launch(params, "w1", widget_repository, url_builder)
    assert response.status_code == 302
    assert response.headers["location"] == RETURN_URL

def test_unknown_widget(widget_repository, url_builder):
    with pytest.raises(HTTPException) as exc_info:
        handle_launch(launch_params(), "missing", widget_repository, url_builder)
    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Widget not found"
    assert widget_repository.find_calls == 0

def test_instance_cannot_be_created(url_builder):
    repository = MagicMock()
    repository.find_widget_guid.return_value = GUID
    repository.find_instance.return_value = None
    repository.create_instance.return_value = None

    with pytest.raises(HTTPException) as exc_info:
        handle_launch(launch_params(), "w1", repository, url_builder)
    assert exc_info.value.status_code == 404
    repository.add_participant.assert_not_called()

def test_instance_url_failure(widget_repository):
    with pytest.raises(HTTPException) as exc_info:
        handle_launch(launch_params(), "w1", widget_repository, InstanceUrlBuilder("not-a-url"))
    assert exc_info.value.status_code == 500
    assert exc_info.value.detail == "Could not build widget instance URL"

def test_instance_url_failure_redirects_to_return_url(widget_repository):
    params = launch_params(launch_presentation_return_url=RETURN_URL)
    response = handle_launch(params, "w1", widget_repository, InstanceUrlBuilder("not-a-url"))
    assert response.status_code == 302
    assert response.headers["location"] == RETURN_URL

def test_rejected_launch(widget_repository, url_builder):
    with pytest.raises(HTTPException) as exc_info:
        handle_launch(launch_params(), "w1", widget_repository, url_builder, RejectingVerifier())
    assert exc_info.value.status_code == 401
    assert widget_repository.instances == []

def test_database_failure_redirects_to_return_url(widget_repository, url_builder):
    widget_repository.update_preference = MagicMock(side_effect=OperationalError("UPDATE preferences", {}, Exception("connection lost")))
    params = launch_params(launch_presentation_return_url=RETURN_URL)

    response = handle_launch(params, "w1", widget_repository, url_builder)

    assert response.status_code == 302
    assert response.headers["location"] == RETURN_URL

def test_database_failure_without_return_url(widget_repository, url_builder):
    widget_repository.find_instance = MagicMock(side_effect=OperationalError("SELECT", {}, Exception("connection lost")))

    with pytest.raises(HTTPException) as exc_info:
        handle_launch(launch_params(), "w1", widget_repository, url_builder)
    assert exc_info.value.status_code == 500
    assert exc_info.value.detail == "Internal Server Error"

def test_unexpected_verifier_failure_redirects_to_return_url(widget_repository, url_builder):
    verifier = MagicMock()
    verifier.verify.side_effect = RuntimeError("key store unavailable")
    params = launch_params(launch_presentation_return_url=RETURN_URL)

    response = handle_launch(params, "w1", widget_repository, url_builder, verifier)

    assert response.status_code == 302
    assert response.headers["location"] == RETURN_URL
    assert widget_repository.instances == []
