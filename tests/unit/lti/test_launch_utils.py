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

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
import pytest
from starlette.datastructures import FormData
from lti.utils import LaunchRequest, build_redirect_url, get_form_data, normalize_ampersands

def test_launch_request_exposes_core_parameters():
    launch_request = LaunchRequest({
        "user_id": "user-1",
        "resource_link_id": "link-1",
        "oauth_consumer_key": "consumer",
        "launch_presentation_locale": "en",
        "roles": "Instructor",
        "launch_presentation_return_url": "https://lms.example.com/return",
    })
    assert launch_request.user_id == "user-1"
    assert launch_request.resource_link_id == "link-1"
    assert launch_request.consumer_key == "consumer"
    assert launch_request.locale == "en"
    assert launch_request.roles == "Instructor"
    assert launch_request.return_url == "https://lms.example.com/return"

def test_launch_request_missing_parameters_are_none():
    launch_request = LaunchRequest({})
    assert launch_request.user_id is None
    assert launch_request.get_param("context_title") is None
    assert launch_request.return_url is None

def test_launch_request_drops_non_text_values():
    launch_request = LaunchRequest({"user_id": "user-1", "upload": object()})
    assert dict(launch_request) == {"user_id": "user-1"}
    assert len(launch_request) == 1

def test_launch_request_is_read_only():
    launch_request = LaunchRequest({"user_id": "user-1"})
    with pytest.raises(TypeError):
        launch_request["user_id"] = "user-2"

def test_build_redirect_url():
    assert build_redirect_url("https://example.com/a", {"x": "1", "y": None}) == "https://example.com/a?x=1"
    assert build_redirect_url("https://example.com/a?z=0", {"x": "1"}) == "https://example.com/a?z=0&x=1"
    assert build_redirect_url("https://example.com/a", {"y": None}) == "https://example.com/a"

def test_build_redirect_url_rejects_relative_urls():
    with pytest.raises(ValueError):
        build_redirect_url("/widgets/w1/index.html", {"x": "1"})

def test_normalize_ampersands():
    assert normalize_ampersands("https://example.com/?a=1&amp;b=2&c=3") == "https://example.com/?a=1&b=2&c=3"

@pytest.mark.asyncio
async def test_get_form_data_is_cached():
    request = MagicMock()
    request.state = SimpleNamespace()
    request.form = AsyncMock(return_value=FormData([("user_id", "user-1")]))

    assert await get_form_data(request) == {"user_id": "user-1"}
    assert await get_form_data(request) == {"user_id": "user-1"}
    request.form.assert_awaited_once()

@pytest.mark.asyncio
async def test_get_form_data_error_returns_empty():
    request = MagicMock()
    request.state = SimpleNamespace()
    request.form = AsyncMock(side_effect=Exception("bad body"))

    assert await get_form_data(request) == {}

@pytest.mark.asyncio
async def test_get_form_data_keeps_first_repeated_value():
    request = MagicMock()
    request.state = SimpleNamespace()
    request.form = AsyncMock(return_value=FormData([
        ("context_title", "First"),
        ("user_id", "user-1"),
        ("context_title", "Second"),
    ]))

    assert await get_form_data(request) == {"context_title": "First", "user_id": "user-1"}
