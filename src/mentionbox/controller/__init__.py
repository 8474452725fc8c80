"""Mention controller and its presentation interface."""

from mentionbox.controller.controller import MentionController
from mentionbox.controller.state import CandidateView, MentionState, Presenter

__all__ = ["CandidateView", "MentionController", "MentionState", "Presenter"]
