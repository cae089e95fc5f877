from rest_framework import serializers

from ..data.models import Card, Deck
from ..domain.logic import card_mastery


class ReviewInSerializer(serializers.Serializer):
    card_id = serializers.UUIDField()
    quality = serializers.IntegerField(min_value=1, max_value=5)
    idempotency_key = serializers.CharField(max_length=64)

class DueQuerySerializer(serializers.Serializer):
    until = serializers.DateTimeField(required=False)  # ISO-8601, default now
    browse = serializers.BooleanField(required=False, default=False)


class CardInSerializer(serializers.Serializer):
    front = serializers.CharField()
    back = serializers.CharField()

class DeckInSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    cards = CardInSerializer(many=True, required=False, default=list)


class CardSerializer(serializers.ModelSerializer):
    mastery = serializers.SerializerMethodField()

    class Meta:
        model = Card
        fields = [
            "id", "front", "back",
            "interval", "ease_factor", "repetitions", "next_review",
            "mastery",
        ]

    def get_mastery(self, card):
        return card_mastery(card)

class DeckSerializer(serializers.ModelSerializer):
    cards = CardSerializer(many=True, read_only=True)

    class Meta:
        model = Deck
        fields = [
            "id", "title", "description",
            "mastery_level", "last_studied", "cards",
        ]
