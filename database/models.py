# © [2025] EDT&Partners. Licensed under CC BY 4.0.

import uuid
from sqlalchemy import Column, String, ForeignKey, Text, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from constants import ALL_DELETE_ORPHAN, WIDGETS_ID, WIDGETS_GUID, WIDGET_INSTANCES_ID
from database.db import Base

def _new_id() -> str:
    return str(uuid.uuid4())

class Widget(Base):
    __tablename__ = 'widgets'
    # External identifier, as it appears in the launch URL path
    id = Column(String, primary_key=True, index=True)
    # Internal identifier (widget IRI)
    guid = Column(String, unique=True, nullable=False, index=True)
    name = Column(String, nullable=True)
    start_url = Column(String, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    default_preferences = relationship("WidgetDefaultPreference", back_populates="widget", cascade=ALL_DELETE_ORPHAN)
    instances = relationship("WidgetInstance", back_populates="widget", cascade=ALL_DELETE_ORPHAN)

class WidgetDefaultPreference(Base):
    __tablename__ = 'widget_default_preferences'
    id = Column(String, primary_key=True, default=_new_id, index=True)
    widget_id = Column(String, ForeignKey(WIDGETS_ID), nullable=False, index=True)
    preference_name = Column(String, nullable=False)
    default_value = Column(Text, nullable=True)

    widget = relationship("Widget", back_populates="default_preferences")

    __table_args__ = (
        UniqueConstraint('widget_id', 'preference_name', name='uq_widget_default_preference'),
    )

class WidgetInstance(Base):
    __tablename__ = 'widget_instances'
    id = Column(String, primary_key=True, default=_new_id, index=True)
    id_key = Column(String, unique=True, nullable=False, index=True)
    api_key = Column(String, nullable=False)
    user_id = Column(String, nullable=False)
    shared_data_key = Column(String, nullable=False)
    widget_guid = Column(String, ForeignKey(WIDGETS_GUID), nullable=False)
    lang = Column(String, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    widget = relationship("Widget", back_populates="instances")
    preferences = relationship("Preference", back_populates="instance", cascade=ALL_DELETE_ORPHAN)
    participants = relationship("Participant", back_populates="instance", cascade=ALL_DELETE_ORPHAN)

    # Concurrent launches for the same tuple must not yield two instances
    __table_args__ = (
        UniqueConstraint('api_key', 'user_id', 'shared_data_key', 'widget_guid', name='uq_widget_instance_tuple'),
    )

class Preference(Base):
    __tablename__ = 'preferences'
    id = Column(String, primary_key=True, default=_new_id, index=True)
    instance_id = Column(String, ForeignKey(WIDGET_INSTANCES_ID), nullable=False, index=True)
    dkey = Column(String, nullable=False)
    dvalue = Column(Text, nullable=True)

    instance = relationship("WidgetInstance", back_populates="preferences")

    __table_args__ = (
        UniqueConstraint('instance_id', 'dkey', name='uq_preference_instance_key'),
    )

class Participant(Base):
    __tablename__ = 'participants'
    id = Column(String, primary_key=True, default=_new_id, index=True)
    instance_id = Column(String, ForeignKey(WIDGET_INSTANCES_ID), nullable=False, index=True)
    participant_id = Column(String, nullable=False)
    display_name = Column(String, nullable=True)
    thumbnail_url = Column(String, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    instance = relationship("WidgetInstance", back_populates="participants")

    __table_args__ = (
        UniqueConstraint('instance_id', 'participant_id', name='uq_participant_instance'),
    )
