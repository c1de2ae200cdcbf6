"""Exceptions for use in Kumite Scoring"""

# Kumite Scoring
# Copyright (C) 2025  Kumite Scoring developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.


# ========== Base Application Exception ==========


class KumiteScoringException(Exception):
    """Base exception for all Kumite Scoring errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Scoring Exceptions ==========


class ScoringException(KumiteScoringException):
    """Base exception for score recording errors."""

    pass


class InvalidScoringActionException(ScoringException):
    """Raised when a scoring action cannot be recognised."""

    pass


class JudgeBusyException(ScoringException):
    """Raised when a judge taps again while a submission is still pending."""

    def __init__(self, judge_id: str):
        super().__init__(f"Judge {judge_id} already has a score submission in flight")
        self.judge_id = judge_id


class ScoreSubmissionException(ScoringException):
    """Raised when the score storage rejects or fails a submission.

    The ledger has already been rolled back when this is raised.
    """

    pass


class JudgeNotFoundException(ScoringException):
    """Raised when a judge is not assigned to the match."""

    pass


class ParticipantNotFoundException(ScoringException):
    """Raised when a participant does not belong to the match."""

    pass


# ========== Match Exceptions ==========


class MatchException(KumiteScoringException):
    """Base exception for match-related errors."""

    pass


class InvalidMatchException(MatchException):
    """Raised when match data is invalid (e.g., not exactly two participants)."""

    pass


class MatchStateException(MatchException):
    """Raised when the match is in an invalid state for the requested operation."""

    pass


class MatchAlreadyCompletedException(MatchStateException):
    """Raised when scoring or finalizing a match that is already completed."""

    pass


class UndeterminedOutcomeException(MatchStateException):
    """Raised when finalizing a match that has no winner yet."""

    pass


class MatchUpdateException(MatchException):
    """Raised when the match service fails to persist the final result."""

    pass


# ========== API Exceptions ==========


class APIException(KumiteScoringException):
    """Base exception for errors returned by the tournament backend."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class NetworkException(APIException):
    """Raised when there's a network connectivity error."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(KumiteScoringException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
