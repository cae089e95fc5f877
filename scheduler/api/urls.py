from django.urls import path
from .views import DeckDetailView, DeckListView, DueCardsView, ReviewView

urlpatterns = [
    path("reviews", ReviewView.as_view(), name="review"),
    path("decks", DeckListView.as_view(), name="decks"),
    path("decks/<uuid:deck_id>", DeckDetailView.as_view(), name="deck-detail"),
    path("decks/<uuid:deck_id>/due-cards", DueCardsView.as_view(), name="due-cards"),
]
