"""Match records: model, normalization, cache and fetching."""

from .fetcher import MatchFetcher
from .records import FullParticipant, MatchRecord, Participant, StubParticipant
from .store import MatchRecordStore
from .transformers import MatchTransformer

__all__ = [
    "FullParticipant",
    "MatchFetcher",
    "MatchRecord",
    "MatchRecordStore",
    "MatchTransformer",
    "Participant",
    "StubParticipant",
]
