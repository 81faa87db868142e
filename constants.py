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

WIDGETS_ID="widgets.id"
WIDGETS_GUID="widgets.guid"
WIDGET_INSTANCES_ID="widget_instances.id"
ALL_DELETE_ORPHAN="all, delete-orphan"
INTERNAL_SERVER_ERROR_MESSAGE="Internal Server Error"
MISSING_PARAMETER_MESSAGE="Missing required launch parameter"
WIDGET_NOT_FOUND_MESSAGE="Widget not found"
INSTANCE_NOT_FOUND_MESSAGE="Widget instance could not be created"
REDIRECT_FAILED_MESSAGE="Could not build widget instance URL"
NOT_AUTHORIZED_MESSAGE="Not authorized"
UNKNOWN_PARTICIPANT_NAME="unknown"
MODERATOR_PREFERENCE="moderator"
MODERATOR_PREFERENCE_VALUE="true"
DEFAULT_START_FILE="index.html"
