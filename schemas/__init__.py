from .schemas import LoginSigned, User, UserCreate  # noqa
