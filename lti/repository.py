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
from typing import Optional, Set

from fastapi import Depends
from sqlalchemy.orm import Session

from database import crud
from database.db import get_db
from database.models import WidgetInstance
from logging_config import setup_logging

# Configure logging
logger = setup_logging(module_name='lti_repository')


class WidgetRepository(ABC):
    """Persistence operations the launch pipeline depends on"""

    @abstractmethod
    def find_widget_guid(self, widget_id: str) -> Optional[str]:
        """Map an external widget id to the widget's internal guid"""
        pass

    @abstractmethod
    def find_instance(self, api_key: str, user_id: str, shared_data_key: str, widget_guid: str) -> Optional[WidgetInstance]:
        pass

    @abstractmethod
    def create_instance(self, api_key: str, user_id: str, shared_data_key: str, widget_guid: str, locale: Optional[str]) -> Optional[WidgetInstance]:
        """Build a new instance; None if the widget cannot be instantiated"""
        pass

    @abstractmethod
    def get_preference_keys(self, instance: WidgetInstance) -> Set[str]:
        """Preference keys the instance declares"""
        pass

    @abstractmethod
    def update_preference(self, instance: WidgetInstance, key: str, value: str) -> None:
        pass

    @abstractmethod
    def add_participant(self, instance: WidgetInstance, participant_id: str, display_name: Optional[str], thumbnail_url: Optional[str]) -> None:
        pass


class SQLWidgetRepository(WidgetRepository):
    """WidgetRepository backed by the SQLAlchemy session of the current request"""

    def __init__(self, db: Session):
        self._db = db

    def find_widget_guid(self, widget_id: str) -> Optional[str]:
        widget = crud.get_widget_by_id(self._db, widget_id)
        if widget is None:
            return None
        return widget.guid

    def find_instance(self, api_key, user_id, shared_data_key, widget_guid):
        return crud.find_widget_instance(self._db, api_key, user_id, shared_data_key, widget_guid)

    def create_instance(self, api_key, user_id, shared_data_key, widget_guid, locale):
        instance = crud.create_widget_instance(self._db, api_key, user_id, shared_data_key, widget_guid, lang=locale)
        if instance is not None:
            logger.info(f"Created widget instance {instance.id} for widget {widget_guid}")
        return instance

    def get_preference_keys(self, instance):
        return crud.get_preference_keys(self._db, instance.id)

    def update_preference(self, instance, key, value):
        crud.update_preference(self._db, instance.id, key, value)

    def add_participant(self, instance, participant_id, display_name, thumbnail_url):
        if not crud.add_participant(self._db, instance.id, participant_id, display_name, thumbnail_url):
            logger.debug(f"Participant {participant_id} already registered on instance {instance.id}")


def get_widget_repository(db: Session = Depends(get_db)) -> WidgetRepository:
    return SQLWidgetRepository(db)
