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

from typing import Iterable, Optional

from lti.config import LaunchConfig


def is_moderator(roles: Optional[str], moderator_roles: Iterable[str] = LaunchConfig.MODERATOR_ROLES) -> bool:
    """Check whether the roles parameter names any moderator role (case-insensitive substring match)"""
    if not roles:
        return False
    roles_lower = roles.lower()
    return any(role.lower() in roles_lower for role in moderator_roles)
