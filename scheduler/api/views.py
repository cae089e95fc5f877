from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import views, status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response
import structlog
import uuid
from ..data.models import Card, Deck
from ..domain.enums import QUALITY_LABELS, Quality
from ..domain.errors import InvalidQuality
from ..domain.logic import card_mastery
from ..services.decks import deck_summary, new_deck, study_queue
from ..services.reviews import record_review
from ..utils.time import to_local_iso
from .serializers import (
    DeckInSerializer,
    DeckSerializer,
    DueQuerySerializer,
    ReviewInSerializer,
)

base_logger = structlog.get_logger()


class ReviewView(views.APIView):
    def post(self, request):
        # Create a unique request_id
        request_id = str(uuid.uuid4())
        logger = base_logger.bind(request_id=request_id)

        s = ReviewInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        card_id = s.validated_data["card_id"]
        quality = s.validated_data["quality"]
        idem = s.validated_data["idempotency_key"]

        try:
            card, log, was_idem = record_review(card_id, quality, idem)
        except InvalidQuality as exc:
            raise ValidationError({"quality": [str(exc)]}) from exc
        except Card.DoesNotExist:
            raise NotFound(f"card {card_id} not found") from None

        status_code = status.HTTP_200_OK if was_idem else status.HTTP_201_CREATED
        deck = card.deck

        # Log with request_id & relevant context
        logger.info(
            "review_api_response",
            card_id=str(card_id),
            quality=quality,
            idempotent=was_idem,
            interval_days=log.interval,
            next_review_utc=log.next_review.isoformat(),
            status=status_code,
        )

        return Response(
            {
                "card_id": str(card.pk),
                "interval_days": log.interval,
                "ease_factor": log.ease_factor,
                "repetitions": log.repetitions,
                "next_review_utc": log.next_review.isoformat(),
                "next_review_local": to_local_iso(log.next_review),
                "quality_label": QUALITY_LABELS[Quality(log.quality)],
                "card_mastery": card_mastery(log),
                "deck_mastery": deck.mastery_level,
                "idempotent": was_idem,
            },
            status=status_code,
        )


class DeckListView(views.APIView):
    def post(self, request):
        logger = base_logger.bind(request_id=str(uuid.uuid4()))

        s = DeckInSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        deck = new_deck(
            s.validated_data["title"],
            s.validated_data["description"],
            s.validated_data["cards"],
        )

        logger.info("deck_api_response", deck_id=str(deck.pk), status=201)
        return Response(DeckSerializer(deck).data, status=status.HTTP_201_CREATED)


class DeckDetailView(views.APIView):
    def get(self, request, deck_id):
        # Create a unique request_id
        request_id = str(uuid.uuid4())
        logger = base_logger.bind(request_id=request_id)

        deck = get_object_or_404(Deck, pk=deck_id)
        data = DeckSerializer(deck).data
        summary = deck_summary(deck)
        data.update(summary)

        logger.info(
            "deck_detail_api_response",
            deck_id=str(deck_id),
            **summary,
        )
        return Response(data)


class DueCardsView(views.APIView):
    def get(self, request, deck_id):
        # Create a unique request_id
        request_id = str(uuid.uuid4())
        logger = base_logger.bind(request_id=request_id)

        deck = get_object_or_404(Deck, pk=deck_id)
        qs = DueQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)
        until = qs.validated_data.get("until") or timezone.now()

        cards, scheduled = study_queue(deck, until, browse=qs.validated_data["browse"])
        results = [str(c.pk) for c in cards]

        logger.info(
            "due_cards_api_response",
            deck_id=str(deck_id),
            until_utc=until.isoformat(),
            until_local=to_local_iso(until),
            card_count=len(results),
            scheduled=scheduled,
        )

        return Response(
            {
                "deck_id": str(deck_id),
                "until_utc": until.isoformat(),
                "until_local": to_local_iso(until),
                "scheduled": scheduled,
                "card_ids": results,
            }
        )
