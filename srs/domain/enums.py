from enum import IntEnum

from django.db import models


class ResponseQuality(IntEnum):
    COMPLETE_BLACKOUT = 0
    INCORRECT_BUT_RECOGNIZED = 1
    INCORRECT_BUT_EASY_TO_RECALL = 2
    CORRECT_WITH_DIFFICULTY = 3
    CORRECT_WITH_HESITATION = 4
    PERFECT_RECALL = 5


QUALITY_LABELS = {
    ResponseQuality.COMPLETE_BLACKOUT: "no recall",
    ResponseQuality.INCORRECT_BUT_RECOGNIZED: "incorrect, but familiar",
    ResponseQuality.INCORRECT_BUT_EASY_TO_RECALL: "incorrect, but easy once shown",
    ResponseQuality.CORRECT_WITH_DIFFICULTY: "correct with difficulty",
    ResponseQuality.CORRECT_WITH_HESITATION: "correct with hesitation",
    ResponseQuality.PERFECT_RECALL: "perfect",
}


class ContentType(models.TextChoices):
    VOCABULARY = "vocabulary", "Vocabulary"
    GRAMMAR = "grammar", "Grammar"


class Maturity(models.TextChoices):
    NEW = "new", "New"
    LEARNING = "learning", "Learning"
    MATURE = "mature", "Mature"
