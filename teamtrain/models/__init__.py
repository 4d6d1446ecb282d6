from teamtrain.models.user import User, RoleEnum
from teamtrain.models.invite import Invite
from teamtrain.models.training import Training
from teamtrain.models.exercise import Exercise
from teamtrain.models.session import AuthSession

__all__ = [
    "User", "RoleEnum",
    "Invite",
    "Training",
    "Exercise",
    "AuthSession",
]
