import reflex as rx

from invoice_composer.components.invoice_form import STATUS_BADGES, _status_badge
from invoice_composer.state import ComposerState
from invoice_composer.workflow import SubmissionStatus


def test_every_active_status_has_a_badge() -> None:
    assert set(STATUS_BADGES) == set(SubmissionStatus) - {SubmissionStatus.IDLE}
    assert STATUS_BADGES[SubmissionStatus.FAILED] == ("Failed", "red")


def test_status_badge_builds_component() -> None:
    assert isinstance(_status_badge(), rx.Component)
