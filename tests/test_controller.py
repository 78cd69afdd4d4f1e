"""
Tests for the Game controller: lifecycle, state stack, input and full
play-through scenarios.
"""

import logging

import pytest


class RecordingState:
    """State that logs its hook calls into a shared list."""

    def __init__(self, name, log):
        from invaders.game.states import StateKind

        self.name = name
        self.log = log
        self.kind = StateKind.PLAY

    def enter(self, game):
        self.log.append(f"{self.name}.enter")

    def leave(self, game):
        self.log.append(f"{self.name}.leave")

    def update(self, game, dt):
        self.log.append(f"{self.name}.update")

    def draw(self, game, dt, surface):
        self.log.append(f"{self.name}.draw")

    def key_down(self, game, key):
        self.log.append(f"{self.name}.key_down")

    def key_up(self, game, key):
        self.log.append(f"{self.name}.key_up")


class TestLifecycle:
    """Tests for initialise, start and stop."""

    def test_initialise_centres_play_area(self, make_game):
        """Test the play area is centred in the surface."""
        from invaders.core.geometry import Rect

        game = make_game()

        assert game.initialised
        assert game.bounds == Rect(200, 150, 600, 450)
        assert (game.width, game.height) == (800, 600)

    def test_bounds_before_initialise(self):
        """Test bounds are unavailable until initialise."""
        from invaders.game.controller import Game
        from invaders.game.errors import ConfigurationError

        game = Game()

        assert not game.initialised
        with pytest.raises(ConfigurationError):
            _ = game.bounds
        with pytest.raises(ConfigurationError):
            game.start()

    @pytest.mark.parametrize("size", [(0, 600), (800, 0), (-1, -1)])
    def test_initialise_rejects_empty_surface(self, size, surface_factory):
        """Test a surface without area is refused."""
        from invaders.game.controller import Game
        from invaders.game.errors import ConfigurationError

        with pytest.raises(ConfigurationError):
            Game().initialise(surface_factory(*size))

    def test_small_surface_warns(self, caplog, surface_factory):
        """Test a surface smaller than the play area logs a warning."""
        from invaders.game.controller import Game

        with caplog.at_level(logging.WARNING, logger="invaders"):
            Game().initialise(surface_factory(300, 200))

        assert "larger than" in caplog.text

    def test_start_enters_welcome(self, make_game):
        """Test start resets the session and begins ticking."""
        from invaders.game.states import StateKind

        game = make_game()
        game.score = 50
        game.start()

        assert game.current_state.kind is StateKind.WELCOME
        assert game.score == 0
        assert game.scheduler.running
        assert game.scheduler.interval_ms == pytest.approx(20.0)

    def test_stop_halts_ticks(self, game):
        """Test no ticks run after stop and the state is kept."""
        game.stop()
        game.stop()

        assert not game.scheduler.running
        assert game.scheduler.advance(5) == 0
        assert game.current_state is not None

    def test_default_collaborators(self):
        """Test a bare Game has silent audio and a manual scheduler."""
        from invaders.core.audio_interface import NullAudio
        from invaders.core.scheduler import ManualScheduler
        from invaders.game.controller import Game

        game = Game()

        assert isinstance(game.audio, NullAudio)
        assert isinstance(game.scheduler, ManualScheduler)
        assert game.lives == game.settings.starting_lives


class TestStateStack:
    """Tests for move/push/pop semantics."""

    def test_move_leaves_before_entering(self, make_game):
        """Test move_to_state replaces the top state."""
        game = make_game()
        log = []
        game.move_to_state(RecordingState("a", log))
        game.move_to_state(RecordingState("b", log))

        assert log == ["a.enter", "a.leave", "b.enter"]
        assert len(game.state_stack) == 1
        assert game.current_state.name == "b"

    def test_push_and_pop_do_not_touch_beneath(self, make_game):
        """Test overlays suspend the state below without leaving it."""
        game = make_game()
        log = []
        game.move_to_state(RecordingState("base", log))
        game.push_state(RecordingState("overlay", log))

        assert len(game.state_stack) == 2
        popped = game.pop_state()

        assert popped.name == "overlay"
        assert log == ["base.enter", "overlay.enter", "overlay.leave"]
        assert game.current_state.name == "base"

    def test_pop_empty_stack_is_noop(self, make_game):
        """Test popping with no states does nothing."""
        game = make_game()

        assert game.pop_state() is None
        assert game.state_stack == []

    def test_only_top_state_receives_events(self, make_game):
        """Test update, draw and keys go to the top state only."""
        from invaders.game.keys import Key

        game = make_game()
        log = []
        game.move_to_state(RecordingState("base", log))
        game.push_state(RecordingState("top", log))
        log.clear()

        game.tick()
        game.key_down(Key.LEFT)
        game.key_up(Key.LEFT)

        assert log == ["top.update", "top.draw", "top.key_down", "top.key_up"]

    def test_tick_draws_new_top_after_transition(self, game, surface):
        """Test the tick draws the state left on top by update."""
        from invaders.game.states import LevelIntroState, StateKind

        game.move_to_state(LevelIntroState(1))
        game.current_state.countdown = 0.01
        surface.clear_calls()

        game.tick()

        assert game.current_state.kind is StateKind.PLAY
        assert "Lives: 3" in surface.texts()

    def test_tick_with_empty_stack(self, make_game, surface):
        """Test ticking with no state does nothing."""
        game = make_game()
        game.tick()

        assert surface.calls == []


class TestInput:
    """Tests for keyboard, touch and mute."""

    def test_pressed_keys_tracked(self, make_game):
        """Test key_down/key_up maintain the pressed set."""
        from invaders.game.keys import Key

        game = make_game()
        game.key_down(Key.LEFT)
        game.key_down(Key.FIRE)
        game.key_up(Key.LEFT)
        game.key_up(Key.RIGHT)

        assert game.pressed_keys == {Key.FIRE}

    def test_touch_start_acts_as_fire(self, game):
        """Test a tap on the welcome screen starts the game."""
        from invaders.game.states import StateKind

        game.touch_start(100)

        assert game.current_state.kind is StateKind.LEVEL_INTRO

    def test_touch_drag_steers(self, play_game):
        """Test dragging holds the key in the drag direction."""
        from invaders.game.keys import Key

        play_game.touch_start(300)
        play_game.touch_move(320)
        assert Key.RIGHT in play_game.pressed_keys
        assert Key.LEFT not in play_game.pressed_keys

        play_game.touch_move(310)
        assert Key.LEFT in play_game.pressed_keys
        assert Key.RIGHT not in play_game.pressed_keys

        play_game.touch_move(310)
        assert Key.LEFT in play_game.pressed_keys

        play_game.touch_end()
        assert Key.LEFT not in play_game.pressed_keys
        assert Key.RIGHT not in play_game.pressed_keys

    def test_first_move_without_start_only_records(self, play_game):
        """Test a move with no previous position sets no direction."""
        play_game.touch_move(300)

        assert play_game.pressed_keys == set()

    def test_touch_end_resets_previous_position(self, play_game):
        """Test a new gesture does not compare against the old one."""
        play_game.touch_start()
        play_game.touch_move(300)
        play_game.touch_end()
        play_game.touch_start()
        play_game.touch_move(100)

        assert play_game.pressed_keys == set()

    def test_mute_toggle_and_set(self, game, audio):
        """Test mute toggles without an argument and sets with one."""
        assert game.mute() is True
        assert audio.muted
        assert game.mute() is False
        assert game.mute(True) is True
        assert game.mute(True) is True
        assert game.mute(False) is False

    def test_muted_audio_is_silent(self, play_game, audio):
        """Test muted cues are not played."""
        from invaders.game.keys import Key

        play_game.mute(True)
        play_game.key_down(Key.FIRE)

        assert audio.played == []

    def test_get_state(self, game):
        """Test the session snapshot."""
        snapshot = game.get_state()

        assert snapshot["state"] == "welcome"
        assert snapshot["stack"] == ["welcome"]
        assert snapshot["lives"] == 3
        assert snapshot["bounds"] == {"left": 200, "top": 150, "right": 600, "bottom": 450}


class TestScenarios:
    """End-to-end play-throughs driven by the manual scheduler."""

    def test_last_invader_shot_clears_level(self, play_game, audio):
        """Test shooting the only invader awards points plus the level bonus."""
        from invaders.game.entities import Invader
        from invaders.game.keys import Key
        from invaders.game.states import StateKind

        play = play_game.current_state
        play.formation.invaders = [Invader(play.ship.x, play.ship.y - 20, 4, 0)]

        play_game.key_down(Key.FIRE)
        play_game.key_up(Key.FIRE)
        play_game.scheduler.advance(1)

        assert play_game.score == 5 + 50
        assert play_game.level == 2
        assert play_game.current_state.kind is StateKind.LEVEL_INTRO
        assert play_game.current_state.level == 2
        assert audio.played == ["shoot", "bang"]

    def test_bomb_on_last_life_ends_game(self, play_game):
        """Test a bomb hitting the ship on the last life shows game over."""
        from invaders.game.entities import Bomb
        from invaders.game.states import StateKind

        play = play_game.current_state
        play_game.lives = 1
        play.bombs = [Bomb(play.ship.x, play.ship.y, 50)]

        play_game.scheduler.advance(1)

        assert play_game.lives == 0
        assert play_game.current_state.kind is StateKind.GAME_OVER
        assert len(play_game.state_stack) == 1

    def test_left_wall_begins_drop(self, play_game):
        """Test reaching the left wall stops horizontal motion and drops."""
        from invaders.game.entities import Invader

        play = play_game.current_state
        left = play_game.bounds.left
        play.formation.invaders = [Invader(left + 0.3, 200, 0, 0), Invader(left + 20.3, 200, 0, 1)]

        play_game.scheduler.advance(1)

        formation = play.formation
        assert formation.dropping
        assert formation.velocity.x == 0
        assert formation.velocity.y > 0
        assert formation.invaders[0].x == pytest.approx(left + 0.3)
        assert formation.invaders[0].y > 200

    def test_formation_reaching_bottom_ends_game(self, play_game):
        """Test invaders crossing the bottom bound end the game."""
        from invaders.game.entities import Invader, Vector
        from invaders.game.states import StateKind

        play = play_game.current_state
        bottom = play_game.bounds.bottom
        play.formation.invaders = [Invader(250, bottom - 0.1, 4, 0)]
        play.formation.velocity = Vector(0.0, 32.5)
        play.formation.next_velocity = Vector(32.5, 0.0)
        play.formation.dropping = True

        play_game.scheduler.advance(1)

        assert play_game.lives == 0
        assert play_game.current_state.kind is StateKind.GAME_OVER

    def test_wall_drop_across_bottom_ends_game_same_tick(self, play_game):
        """Test a drop starting at the left wall that crosses the bottom ends the game at once."""
        from invaders.game.entities import Invader
        from invaders.game.states import StateKind

        play = play_game.current_state
        bounds = play_game.bounds
        play.formation.invaders = [Invader(bounds.left + 0.3, bounds.bottom - 0.1, 4, 0)]

        play_game.scheduler.advance(1)

        assert play_game.lives == 0
        assert play_game.current_state.kind is StateKind.GAME_OVER

    def test_fire_requests_limited_by_cooldown(self, play_game):
        """Test two quick fire presses produce a single rocket."""
        from invaders.game.keys import Key

        play = play_game.current_state
        for _ in range(2):
            play_game.key_down(Key.FIRE)
            play_game.key_up(Key.FIRE)
            play_game.scheduler.advance(1)

        assert len(play.rockets) == 1

    def test_full_play_through_keeps_counters_valid(self, make_game):
        """Test lives and score stay non-negative and score never drops."""
        from invaders.game.config import GameSettings
        from invaders.game.keys import Key
        from invaders.game.states import StateKind

        game = make_game(GameSettings(bomb_rate=5.0), seed=42)
        game.start()
        game.key_down(Key.FIRE)
        game.key_down(Key.FIRE)  # held fire from here on

        last_score = 0
        for _ in range(20000):
            game.scheduler.advance(1)
            assert game.lives >= 0
            assert game.score >= last_score
            last_score = game.score
            if game.current_state.kind is StateKind.GAME_OVER:
                break

        assert game.current_state.kind is StateKind.GAME_OVER
        assert game.lives == 0

    def test_restart_is_repeatable(self, play_game):
        """Test restarting twice from game over gives the same fresh session."""
        from invaders.game.keys import Key
        from invaders.game.states import GameOverState

        snapshots = []
        for _ in range(2):
            play_game.move_to_state(GameOverState())
            play_game.score = 321
            play_game.level = 5
            play_game.key_down(Key.FIRE)
            play_game.key_up(Key.FIRE)
            snapshots.append(play_game.get_state())

        assert snapshots[0] == snapshots[1]
        assert snapshots[0]["state"] == "level_intro"
        assert (snapshots[0]["lives"], snapshots[0]["score"], snapshots[0]["level"]) == (3, 0, 1)
