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

import hashlib
from typing import Optional


def derive_session_key(consumer_token: Optional[str], widget_guid: Optional[str], resource_link_id: Optional[str]) -> str:
    """
    Derive the internal shared data key for a launch.

    The key scopes instance lookup to one consumer, one widget and one resource link.
    Identical inputs always give the same key; absent inputs are treated as empty strings.

    Args:
        consumer_token: Opaque consumer token (the oauth_consumer_key)
        widget_guid: Internal widget identifier
        resource_link_id: The consumer's resource link id

    Returns:
        str: Hex digest identifying the session
    """
    parts = [resource_link_id or "", widget_guid or "", consumer_token or ""]
    # Length-prefix each part so ("a:b", "c") and ("a", "b:c") cannot collide
    material = "".join(f"{len(part)}:{part}" for part in parts)
    return hashlib.sha256(material.encode("utf-8")).hexdigest()
