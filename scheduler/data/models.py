import uuid

from django.db import models
from django.utils import timezone

from ..config import INITIAL_EASE


class Deck(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    mastery_level = models.PositiveSmallIntegerField(default=0)  # derived, 0-100
    last_studied = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        app_label = "scheduler"
        ordering = ["created_at"]

    def __str__(self):
        return self.title


class Card(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    deck = models.ForeignKey(Deck, related_name="cards", on_delete=models.CASCADE)
    position = models.PositiveIntegerField(default=0)
    front = models.TextField()
    back = models.TextField()
    interval = models.PositiveIntegerField(default=0)  # days
    ease_factor = models.FloatField(default=INITIAL_EASE)
    repetitions = models.PositiveIntegerField(default=0)
    next_review = models.DateTimeField(default=timezone.now)  # UTC

    class Meta:
        app_label = "scheduler"
        ordering = ["position"]
        indexes = [
            models.Index(fields=["deck", "next_review"], name="scheduler_c_deck_id_5b0f1e_idx"),
        ]

    def __str__(self):
        return self.front


class ReviewLog(models.Model):
    card = models.ForeignKey(Card, related_name="reviews", on_delete=models.CASCADE)
    quality = models.SmallIntegerField()
    idempotency_key = models.CharField(max_length=64)
    created_at = models.DateTimeField(default=timezone.now)
    interval = models.PositiveIntegerField()
    ease_factor = models.FloatField()
    repetitions = models.PositiveIntegerField()
    next_review = models.DateTimeField()

    class Meta:
        app_label = "scheduler"
        unique_together = (("card", "idempotency_key"),)
        indexes = [
            models.Index(fields=["card", "created_at"], name="scheduler_r_card_id_7c2d4a_idx"),
        ]
