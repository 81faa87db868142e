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

from constants import (
    INSTANCE_NOT_FOUND_MESSAGE,
    INTERNAL_SERVER_ERROR_MESSAGE,
    MISSING_PARAMETER_MESSAGE,
    NOT_AUTHORIZED_MESSAGE,
    REDIRECT_FAILED_MESSAGE,
)

class LaunchError(Exception):
    """Base exception for terminal launch failures"""
    status_code = 500
    default_message = INTERNAL_SERVER_ERROR_MESSAGE

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

class MissingRequiredParameterError(LaunchError):
    """Raised when user_id, the session key or the widget id is absent"""
    status_code = 500
    default_message = MISSING_PARAMETER_MESSAGE

class WidgetOrInstanceNotFoundError(LaunchError):
    """Raised when the widget cannot be resolved or no instance can be provisioned"""
    status_code = 404
    default_message = INSTANCE_NOT_FOUND_MESSAGE

class RedirectConstructionError(LaunchError):
    """Raised when the instance URL cannot be built"""
    status_code = 500
    default_message = REDIRECT_FAILED_MESSAGE

class LaunchAuthenticationError(LaunchError):
    """Raised by a launch verifier that rejects the request"""
    status_code = 401
    default_message = NOT_AUTHORIZED_MESSAGE
