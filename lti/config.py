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

import os
from typing import Optional


class LaunchParameters:
    """Names of the Basic LTI launch parameters the provider reads"""
    USER_ID = "user_id"
    RESOURCE_LINK_ID = "resource_link_id"
    CONSUMER_KEY = "oauth_consumer_key"
    LOCALE = "launch_presentation_locale"
    ROLES = "roles"
    RETURN_URL = "launch_presentation_return_url"
    PERSON_NAME_FULL = "lis_person_name_full"
    USER_IMAGE = "user_image"


class LaunchConfig:
    """Fixed vocabularies for the launch policy"""

    # Any case-insensitive substring match in the roles parameter grants moderator status
    MODERATOR_ROLES = (
        "instructor",
        "moderator",
        "teachingassistant",
        "administrator",
        "mentor",
        "manager",
        "content developer",
    )

    # Launch parameters copied onto instance preferences of the same name
    PREFERENCE_PARAMETERS = (
        "launch_presentation_document_target",
        "tool_consumer_instance_name",
        "tool_consumer_instance_description",
        "tool_consumer_instance_url",
        "context_type",
        "context_title",
        "context_label",
        "resource_link_description",
        "resource_link_title",
        "lis_person_name_given",
        "lis_person_name_full",
        "lis_person_contact_email_primary",
        "tool_consumer_instance_contact_email",
    )


class WidgetServerConfig:
    """Deployment settings read from the environment"""

    @staticmethod
    def get_widget_base_url() -> Optional[str]:
        base_url = os.getenv("WIDGET_BASE_URL")
        return base_url.rstrip('/') if base_url else None

    @staticmethod
    def get_proxy_url() -> Optional[str]:
        return os.getenv("WIDGET_PROXY_URL") or None

    @staticmethod
    def get_catalog_path() -> Optional[str]:
        return os.getenv("WIDGET_CATALOG_PATH") or None

    @staticmethod
    def run_migrations() -> bool:
        return os.getenv("RUN_MIGRATIONS", "true").lower() in ("1", "true", "yes")
