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

import logging
import secrets
from typing import Optional, Set
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from database.schemas import WidgetCreate
from database.models import Participant, Preference, Widget, WidgetDefaultPreference, WidgetInstance

logger = logging.getLogger(__name__)

# Widget CRUD operations
def get_widget_by_id(db: Session, widget_id: str) -> Optional[Widget]:
    """Get a widget by its external identifier (the launch path segment)."""
    return db.query(Widget).filter(Widget.id == widget_id).first()

def get_widget_by_guid(db: Session, guid: str) -> Optional[Widget]:
    return db.query(Widget).filter(Widget.guid == guid).first()

def create_widget(db: Session, widget_data: WidgetCreate) -> Widget:
    try:
        widget = Widget(
            id=widget_data.id,
            guid=widget_data.guid,
            name=widget_data.name,
            start_url=widget_data.start_url
        )
        for name, default_value in widget_data.preferences.items():
            widget.default_preferences.append(
                WidgetDefaultPreference(preference_name=name, default_value=default_value)
            )
        db.add(widget)
        db.commit()
        db.refresh(widget)
        return widget
    except SQLAlchemyError as e:
        db.rollback()
        raise e

def add_missing_default_preferences(db: Session, widget: Widget, preferences: dict) -> int:
    """Add default preferences the widget does not declare yet. Existing defaults are left untouched."""
    declared = {pref.preference_name for pref in widget.default_preferences}
    added = 0
    try:
        for name, default_value in preferences.items():
            if name in declared:
                continue
            widget.default_preferences.append(
                WidgetDefaultPreference(preference_name=name, default_value=default_value)
            )
            added += 1
        if added:
            db.commit()
            db.refresh(widget)
        return added
    except SQLAlchemyError as e:
        db.rollback()
        raise e

# Widget instance CRUD operations
def generate_id_key() -> str:
    """Generate the opaque key a running instance is addressed by."""
    return secrets.token_hex(20)

def find_widget_instance(db: Session, api_key: str, user_id: str, shared_data_key: str, widget_guid: str) -> Optional[WidgetInstance]:
    return db.query(WidgetInstance).filter(
        WidgetInstance.api_key == api_key,
        WidgetInstance.user_id == user_id,
        WidgetInstance.shared_data_key == shared_data_key,
        WidgetInstance.widget_guid == widget_guid
    ).first()

def create_widget_instance(db: Session, api_key: str, user_id: str, shared_data_key: str, widget_guid: str, lang: Optional[str] = None) -> Optional[WidgetInstance]:
    """
    Create a new instance of a widget, seeded with the widget's default preferences.

    Returns None if the widget no longer exists. If another request created the same
    (api_key, user_id, shared_data_key, widget_guid) instance first, that instance is returned.
    """
    widget = get_widget_by_guid(db, widget_guid)
    if not widget:
        logger.warning(f"Cannot create instance, no widget with guid {widget_guid}")
        return None

    try:
        instance = WidgetInstance(
            id_key=generate_id_key(),
            api_key=api_key,
            user_id=user_id,
            shared_data_key=shared_data_key,
            widget_guid=widget_guid,
            lang=lang
        )
        # The copied defaults are the preferences this instance declares
        for default in widget.default_preferences:
            instance.preferences.append(Preference(dkey=default.preference_name, dvalue=default.default_value))
        db.add(instance)
        db.commit()
        db.refresh(instance)
        return instance
    except IntegrityError:
        db.rollback()
        logger.info(f"Instance for widget {widget_guid} and user {user_id} was created concurrently, reusing it")
        return find_widget_instance(db, api_key, user_id, shared_data_key, widget_guid)
    except SQLAlchemyError as e:
        db.rollback()
        raise e

# Preference CRUD operations
def get_preference(db: Session, instance_id: str, dkey: str) -> Optional[Preference]:
    return db.query(Preference).filter(
        Preference.instance_id == instance_id,
        Preference.dkey == dkey
    ).first()

def get_preference_keys(db: Session, instance_id: str) -> Set[str]:
    rows = db.query(Preference.dkey).filter(Preference.instance_id == instance_id).all()
    return {row[0] for row in rows}

def update_preference(db: Session, instance_id: str, dkey: str, dvalue: Optional[str]) -> bool:
    """Overwrite the value of an existing preference. Never creates a new key."""
    preference = get_preference(db, instance_id, dkey)
    if not preference:
        return False
    try:
        preference.dvalue = dvalue
        db.commit()
        return True
    except SQLAlchemyError as e:
        db.rollback()
        raise e

# Participant CRUD operations
def get_participant(db: Session, instance_id: str, participant_id: str) -> Optional[Participant]:
    return db.query(Participant).filter(
        Participant.instance_id == instance_id,
        Participant.participant_id == participant_id
    ).first()

def add_participant(db: Session, instance_id: str, participant_id: str, display_name: Optional[str], thumbnail_url: Optional[str]) -> bool:
    """Register a participant. Returns False if it was already registered."""
    if get_participant(db, instance_id, participant_id):
        return False
    try:
        participant = Participant(
            instance_id=instance_id,
            participant_id=participant_id,
            display_name=display_name,
            thumbnail_url=thumbnail_url
        )
        db.add(participant)
        db.commit()
        return True
    except IntegrityError:
        db.rollback()
        return False
    except SQLAlchemyError as e:
        db.rollback()
        raise e
