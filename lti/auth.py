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

from abc import ABC, abstractmethod

from logging_config import setup_logging
from lti.utils import LaunchRequest

# Configure logging
logger = setup_logging(module_name='lti_auth')


class LaunchVerifier(ABC):
    """Decides whether a launch request may proceed"""

    @abstractmethod
    def verify(self, launch_request: LaunchRequest, widget_id: str) -> None:
        """Raise LaunchAuthenticationError to reject the launch"""
        pass


class ConsumerKeyVerifier(LaunchVerifier):
    """
    Accepts every launch without checking the OAuth signature.

    The consumer key is only used as an opaque token to namespace instances.
    Replace this verifier with a signature-checking one to authenticate consumers.
    """

    def verify(self, launch_request: LaunchRequest, widget_id: str) -> None:
        logger.debug(f"Launch for widget {widget_id} accepted without signature verification")


def get_launch_verifier() -> LaunchVerifier:
    return ConsumerKeyVerifier()
