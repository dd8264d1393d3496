# models/__init__.py
from .member import Member, MEMBER_ROLES
from .task import Task, TASK_STATUSES
from .user import User
