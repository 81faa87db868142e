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

from fastapi import APIRouter, Depends, Request

from logging_config import setup_logging
from lti.auth import LaunchVerifier, get_launch_verifier
from lti.repository import WidgetRepository, get_widget_repository
from lti.services import handle_launch
from lti.urls import InstanceUrlBuilder, get_instance_url_builder
from lti.utils import LaunchRequest, get_form_data

# Configure logging
logger = setup_logging(module_name='lti')

router = APIRouter()


@router.post("/{widget_id}", tags=["LTI"])
async def launch_post(
    widget_id: str,
    request: Request,
    repository: WidgetRepository = Depends(get_widget_repository),
    url_builder: InstanceUrlBuilder = Depends(get_instance_url_builder),
    verifier: LaunchVerifier = Depends(get_launch_verifier)
):
    """Handles a Basic LTI launch for the widget registered under widget_id"""
    form_data = await get_form_data(request)
    launch_request = LaunchRequest(form_data)
    logger.info(f"Launch request for widget {widget_id} with parameters: {sorted(launch_request.keys())}")
    return handle_launch(launch_request, widget_id, repository, url_builder, verifier)
