# -*- coding: utf-8 -*-

# Importing models for out database
from . import database  # noqa
from .database import SqlAlchemyBase, create_session, get_db  # noqa
from .user import User  # noqa
