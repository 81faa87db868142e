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

from fastapi import HTTPException, status
from fastapi.responses import RedirectResponse

from constants import INTERNAL_SERVER_ERROR_MESSAGE
from logging_config import setup_logging
from lti.utils import LaunchRequest, normalize_ampersands

# Configure logging
logger = setup_logging(module_name='lti_responder')


class LaunchResponder:
    """Turns the outcome of a launch into the HTTP response"""

    def __init__(self, launch_request: LaunchRequest):
        self.launch_request = launch_request

    def success(self, instance_url: str, created: bool) -> RedirectResponse:
        """Redirect to the instance: 201 when the instance was just created, 200 otherwise"""
        status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
        return RedirectResponse(url=normalize_ampersands(instance_url), status_code=status_code)

    def error(self, status_code: int, message: str = INTERNAL_SERVER_ERROR_MESSAGE) -> RedirectResponse:
        """
        Send an error; this will use any return URL supplied by the consumer by preference,
        otherwise raises a standard HTTP error.
        """
        return_url = self.launch_request.return_url
        if return_url:
            logger.info(f"Launch failed with {status_code}, redirecting to consumer return URL")
            return RedirectResponse(url=return_url, status_code=status.HTTP_302_FOUND)
        raise HTTPException(status_code=status_code, detail=message)
