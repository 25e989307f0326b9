# Area: Session Tests
"""Tests for Session: roster, rounds, reveal and shutdown."""

import logging
from unittest.mock import patch

import pytest

from rps_lobby._session.enums import Departure, SessionState
from rps_lobby._session.session import RemotePlayer, Session
from rps_lobby._shared.messages import (
    MakeChoiceRequest,
    PlayerListRequest,
    StartGameRequest,
)
from rps_lobby.errors import (
    AlreadySubmittedError,
    BadPasswordError,
    GameNotOpenError,
    GameNotStartedError,
    InvalidChoiceError,
    NameTakenError,
    NotEnoughPlayersError,
)


@pytest.fixture
def controller(make_channel):
    return make_channel("controller")


@pytest.fixture
def session(controller, classic_rules):
    return Session("friday", controller, classic_rules)


def join(session, make_channel, *names):
    """Join players and return their channels by name."""
    channels = {}
    for name in names:
        channels[name] = make_channel(name)
        session.add_player(name, channels[name])
    return channels


class TestAddPlayer:
    """Tests for joining a session."""

    def test_join_sends_rules_and_roster(self, session, make_channel):
        channels = join(session, make_channel, "alice", "bob")

        response = channels["bob"].of_type("join-response")[0]
        assert response["players"] == ["alice", "bob"]
        assert response["rules"] == session.rules.to_dict()

    def test_join_notifies_others_and_controller(self, session, controller,
                                                 make_channel):
        channels = join(session, make_channel, "alice", "bob")

        assert channels["alice"].of_type("notify-join") == [
            {"type": "notify-join", "name": "bob"}
        ]
        assert [m["name"] for m in controller.of_type("notify-join")] == ["alice", "bob"]
        assert channels["bob"].of_type("notify-join") == []

    def test_join_returns_remote_player(self, session, make_channel):
        channel = make_channel("alice")
        player = session.add_player("alice", channel)
        assert isinstance(player, RemotePlayer)
        assert player.channel is channel
        assert player.score == 0

    def test_name_taken(self, session, make_channel):
        join(session, make_channel, "alice")
        with pytest.raises(NameTakenError):
            session.add_player("alice", make_channel("alice-2"))
        assert session.player_names() == ["alice"]

    def test_join_while_started_fails(self, session, make_channel):
        join(session, make_channel, "alice")
        session.start_game()
        with pytest.raises(GameNotOpenError):
            session.add_player("bob", make_channel("bob"))
        assert session.player_names() == ["alice"]

    def test_join_after_close_fails(self, session, make_channel):
        session.close()
        with pytest.raises(GameNotOpenError):
            session.add_player("bob", make_channel("bob"))


class TestPassword:
    """Tests for password-protected sessions."""

    def test_wrong_password_rejected(self, controller, classic_rules, make_channel):
        session = Session("locked", controller, classic_rules, password="s3cret")
        with pytest.raises(BadPasswordError):
            session.add_player("alice", make_channel(), password="guess")
        with pytest.raises(BadPasswordError):
            session.add_player("alice", make_channel())
        assert session.players == {}

    def test_right_password_accepted(self, controller, classic_rules, make_channel):
        session = Session("locked", controller, classic_rules, password="s3cret")
        session.add_player("alice", make_channel(), password="s3cret")
        assert session.player_names() == ["alice"]

    def test_no_password_ignores_supplied_one(self, session, make_channel):
        session.add_player("alice", make_channel(), password="whatever")
        assert session.player_names() == ["alice"]


class TestRemovePlayer:
    """Tests for participants leaving."""

    def test_unknown_player(self, session):
        assert session.remove_player("ghost") == Departure.NOT_FOUND

    def test_leave_while_open_notifies(self, session, controller, make_channel):
        channels = join(session, make_channel, "alice", "bob")

        assert session.remove_player("alice") == Departure.LEFT
        assert session.player_names() == ["bob"]
        assert channels["bob"].last == {"type": "notify-leave", "name": "alice"}
        assert controller.last == {"type": "notify-leave", "name": "alice"}
        assert session.state == SessionState.OPEN

    def test_last_player_leaving_keeps_session_open(self, session, make_channel):
        join(session, make_channel, "alice")
        session.remove_player("alice")
        assert session.state == SessionState.OPEN
        assert session.players == {}

    def test_mid_round_disconnect_closes_everything(self, session, controller,
                                                    make_channel):
        channels = join(session, make_channel, "alice", "bob")
        session.start_game()
        session.make_choice("alice", "Rock")

        assert session.remove_player("bob") == Departure.SESSION_CLOSED
        assert session.state == SessionState.CLOSED
        assert controller.closed is True
        assert all(channel.closed for channel in channels.values())
        for channel in [controller, *channels.values()]:
            assert channel.of_type("results") == []


class TestStartGame:
    """Tests for starting a round."""

    def test_start_prompts_every_player(self, session, make_channel):
        channels = join(session, make_channel, "alice", "bob")
        session.start_game()

        assert session.state == SessionState.STARTED
        for channel in channels.values():
            assert channel.last == {"type": "choice"}

    def test_start_with_empty_roster(self, session):
        with pytest.raises(NotEnoughPlayersError):
            session.start_game()
        assert session.state == SessionState.OPEN

    def test_start_twice(self, session, make_channel):
        join(session, make_channel, "alice")
        session.start_game()
        with pytest.raises(GameNotOpenError, match="already started"):
            session.start_game()
        assert session.state == SessionState.STARTED


class TestMakeChoice:
    """Tests for submitting choices."""

    def test_choice_before_start(self, session, make_channel):
        join(session, make_channel, "alice")
        with pytest.raises(GameNotStartedError):
            session.make_choice("alice", "Rock")

    def test_invalid_choice(self, session, make_channel):
        join(session, make_channel, "alice", "bob")
        session.start_game()
        with pytest.raises(InvalidChoiceError):
            session.make_choice("alice", "Lizard")
        assert session.players["alice"].has_choice is False

    def test_second_submission_rejected(self, session, controller, make_channel):
        channels = join(session, make_channel, "alice", "bob")
        session.start_game()

        assert session.make_choice("alice", "Rock") is None
        with pytest.raises(AlreadySubmittedError):
            session.make_choice("alice", "Paper")

        assert session.state == SessionState.STARTED
        assert controller.of_type("results") == []
        assert channels["alice"].of_type("results") == []

    def test_first_submission_survives_rejected_second(self, session, make_channel):
        join(session, make_channel, "alice", "bob")
        session.start_game()
        session.make_choice("alice", "Rock")
        with pytest.raises(AlreadySubmittedError):
            session.make_choice("alice", "Paper")

        results = session.make_choice("bob", "Scissors")
        assert results.choices == {"alice": "Rock", "bob": "Scissors"}


class TestReveal:
    """Tests for resolving a round."""

    def test_round_trip(self, session, controller, make_channel):
        channels = join(session, make_channel, "alice", "bob")
        session.start_game()
        session.make_choice("alice", "Rock")
        results = session.make_choice("bob", "Paper")

        expected = {
            "type": "results",
            "choices": {"alice": "Rock", "bob": "Paper"},
            "winner": "bob",
        }
        for channel in [controller, *channels.values()]:
            assert channel.of_type("results") == [expected]

        assert results.winner == "bob"
        assert session.rules.resolve(["Rock", "Paper"]) == 1
        assert session.state == SessionState.OPEN
        assert session.players["bob"].score == 1
        assert session.players["alice"].score == 0
        assert session.rounds_played == 1

    def test_tie_scores_nobody(self, session, controller, make_channel):
        join(session, make_channel, "alice", "bob", "carol")
        session.start_game()
        session.make_choice("alice", "Rock")
        session.make_choice("bob", "Paper")
        results = session.make_choice("carol", "Scissors")

        assert results.winner is None
        assert controller.last["winner"] is None
        assert all(p.score == 0 for p in session.players.values())

    def test_order_of_submission_does_not_matter(self, session, make_channel):
        """Test that choices are resolved in roster order."""
        join(session, make_channel, "alice", "bob")
        session.start_game()
        session.make_choice("bob", "Scissors")
        results = session.make_choice("alice", "Rock")

        assert list(results.choices) == ["alice", "bob"]
        assert results.winner == "alice"

    def test_pending_choices_cleared_after_reveal(self, session, make_channel):
        join(session, make_channel, "alice", "bob")
        session.start_game()
        session.make_choice("alice", "Rock")
        session.make_choice("bob", "Rock")

        assert all(not p.has_choice for p in session.players.values())

    def test_attempt_reveal_waits_for_everyone(self, session, make_channel):
        join(session, make_channel, "alice", "bob")
        session.start_game()
        session.make_choice("alice", "Rock")
        assert session.attempt_reveal() is None
        assert session.players["alice"].has_choice is True

    def test_scores_accumulate_over_rounds(self, session, make_channel):
        join(session, make_channel, "alice", "bob")
        for _ in range(3):
            session.start_game()
            session.make_choice("alice", "Paper")
            session.make_choice("bob", "Rock")

        assert session.players["alice"].score == 3
        assert session.rounds_played == 3

    def test_single_player_round_wins(self, session, make_channel):
        join(session, make_channel, "alice")
        session.start_game()
        results = session.make_choice("alice", "Rock")
        assert results.winner == "alice"

    def test_broadcast_failure_does_not_stop_others(self, session, controller,
                                                    make_channel):
        alice = make_channel("alice")
        session.add_player("alice", alice)
        dead = make_channel("bob")
        session.add_player("bob", dead)
        dead.fail_send = True
        session.start_game()
        session.make_choice("alice", "Rock")
        with patch("rps_lobby._session.session.logger") as mock_logger:
            session.make_choice("bob", "Scissors")
            mock_logger.warning.assert_called()

        assert alice.of_type("results")[0]["winner"] == "alice"
        assert controller.of_type("results")[0]["winner"] == "alice"


class TestRequests:
    """Tests for controller_request and player_request dispatch."""

    def test_controller_player_list(self, session, controller, make_channel):
        join(session, make_channel, "alice", "bob")
        session.controller_request(PlayerListRequest())
        assert controller.last == {
            "type": "player-list-response", "players": ["alice", "bob"],
        }

    def test_controller_start_error_reported(self, session, controller):
        session.controller_request(StartGameRequest())
        assert controller.last == {"type": "error", "message": "not enough players"}
        assert session.state == SessionState.OPEN

    def test_controller_cannot_make_choice(self, session, controller):
        session.controller_request(MakeChoiceRequest(choice="Rock"))
        assert controller.last == {"type": "error", "message": "invalid request"}

    def test_player_list_for_player(self, session, make_channel):
        channels = join(session, make_channel, "alice")
        session.player_request("alice", PlayerListRequest())
        assert channels["alice"].last["players"] == ["alice"]

    def test_player_error_goes_to_offender_only(self, session, controller,
                                                make_channel):
        channels = join(session, make_channel, "alice", "bob")
        controller.clear()
        channels["bob"].clear()
        session.start_game()
        session.player_request("alice", MakeChoiceRequest(choice="Rock"))
        session.player_request("alice", MakeChoiceRequest(choice="Rock"))

        assert channels["alice"].last == {
            "type": "error", "message": "choice already submitted",
        }
        assert channels["bob"].of_type("error") == []
        assert controller.of_type("error") == []

    def test_player_cannot_start(self, session, make_channel):
        channels = join(session, make_channel, "alice")
        session.player_request("alice", StartGameRequest())
        assert channels["alice"].last["type"] == "error"
        assert session.state == SessionState.OPEN

    def test_unknown_player_ignored(self, session, controller):
        session.player_request("ghost", PlayerListRequest())
        assert controller.sent == []


class TestClose:
    """Tests for closing a session."""

    def test_close_closes_all_channels(self, session, controller, make_channel):
        channels = join(session, make_channel, "alice", "bob")
        session.close()
        assert session.state == SessionState.CLOSED
        assert controller.closed
        assert all(c.closed for c in channels.values())

    def test_close_swallows_channel_errors(self, session, controller, make_channel):
        broken = make_channel("alice", fail_close=True)
        session.add_player("alice", broken)
        bob = make_channel("bob")
        session.add_player("bob", bob)

        session.close()

        assert broken.close_calls == 1
        assert bob.closed is True

    def test_close_is_idempotent(self, session):
        session.close()
        session.close()
        assert session.state == SessionState.CLOSED


class TestLogContext:
    """Tests for the game/player fields attached to log records."""

    def test_join_record_carries_game_and_player(self, session, make_channel,
                                                 caplog):
        caplog.set_level(logging.INFO, logger="rps_lobby")
        session.add_player("alice", make_channel("alice"))

        record = next(r for r in caplog.records if "joined" in r.getMessage())
        assert record.game == "friday"
        assert record.player == "alice"

    def test_round_record_carries_game_only(self, session, make_channel, caplog):
        caplog.set_level(logging.INFO, logger="rps_lobby")
        join(session, make_channel, "alice")
        session.start_game()
        session.make_choice("alice", "Rock")

        record = next(r for r in caplog.records if "resolved" in r.getMessage())
        assert record.game == "friday"
        assert not hasattr(record, "player")
