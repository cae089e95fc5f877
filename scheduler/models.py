# Django loads models from <app>.models
from .data.models import Card, Deck, ReviewLog  # noqa: F401
