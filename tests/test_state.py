"""Tests for signpost.state module."""

import pytest

from signpost.state import (
    Alert,
    AlertButton,
    ButtonRole,
    DialogAction,
    ModalPresentation,
    ModalSlot,
    NavigationPath,
    NavigationState,
)

from routes import Article, Profile, Settings


class TestPushStack:
    def test_starts_at_root(self, navigation):
        assert navigation.path == []
        assert navigation.path.top is None

    def test_push_pop_pop_to_root(self, navigation):
        navigation.push(Profile("123"))
        navigation.push(Settings())
        assert navigation.path == [Profile("123"), Settings()]
        assert navigation.path.top == Settings()

        navigation.pop()
        assert navigation.path == [Profile("123")]

        navigation.pop_to_root()
        assert navigation.path == []

    def test_pop_on_empty_is_noop(self, navigation, changes):
        navigation.pop()
        navigation.pop()
        assert navigation.path == []
        assert changes == []

    def test_length_tracks_effective_operations(self, navigation):
        operations = ["push", "push", "pop", "pop", "pop", "push", "push", "push", "pop"]
        expected = 0
        for index, operation in enumerate(operations):
            if operation == "push":
                navigation.push(Article(str(index)))
                expected += 1
            else:
                navigation.pop()
                expected = max(expected - 1, 0)
            assert len(navigation.path) == expected

    def test_same_destination_twice(self, navigation):
        navigation.push(Settings())
        navigation.push(Settings())
        assert len(navigation.path) == 2

    def test_set_path(self, navigation):
        navigation.push(Settings())
        navigation.set_path([Profile("1"), Article("a")])
        assert navigation.path == [Profile("1"), Article("a")]

    def test_assign_path(self, navigation, changes):
        navigation.path = (Profile("1"), Profile("2"))
        assert navigation.path == [Profile("1"), Profile("2")]
        assert changes == ["path"]

    def test_initial_path(self):
        navigation = NavigationState([Profile("1")])
        assert navigation.path == [Profile("1")]

    def test_pop_to_root_when_empty_sends_nothing(self, navigation, changes):
        navigation.pop_to_root()
        assert changes == []


class TestNavigationPath:
    def test_remove_all(self, navigation):
        navigation.set_path([Profile("1"), Settings(), Profile("2"), Article("a")])
        removed = navigation.path.remove_all(lambda d: isinstance(d, Profile))
        assert removed == 2
        assert navigation.path == [Settings(), Article("a")]

    def test_remove_all_without_match_sends_nothing(self, navigation, changes):
        navigation.push(Settings())
        changes.clear()
        assert navigation.path.remove_all(lambda d: False) == 0
        assert changes == []

    def test_direct_mutation_notifies(self, navigation, changes):
        navigation.path.append(Profile("1"))
        navigation.path.insert(0, Settings())
        navigation.path[1] = Profile("2")
        del navigation.path[0]
        assert navigation.path == [Profile("2")]
        assert changes == ["path"] * 4

    def test_extend_notifies_once(self, navigation, changes):
        navigation.path.extend([Profile("1"), Profile("2"), Profile("3")])
        assert changes == ["path"]

    def test_membership_and_count(self, navigation):
        navigation.set_path([Profile("1"), Settings(), Profile("1")])
        assert Settings() in navigation.path
        assert Article("x") not in navigation.path
        assert navigation.path.count(Profile("1")) == 2
        assert navigation.path.index(Settings()) == 1

    def test_slice_is_detached(self, navigation):
        navigation.set_path([Profile("1"), Settings()])
        head = navigation.path[:1]
        head.append(Article("a"))
        assert navigation.path == [Profile("1"), Settings()]

    def test_slice_assignment(self, navigation):
        navigation.set_path([Profile("1"), Settings(), Article("a")])
        navigation.path[1:] = [Profile("9")]
        assert navigation.path == [Profile("1"), Profile("9")]

    def test_equality(self):
        assert NavigationPath([Settings()]) == NavigationPath([Settings()])
        assert NavigationPath([Settings()]) == (Settings(),)
        assert NavigationPath([Settings()]) != [Profile("1")]


class TestModalSlots:
    def test_present_and_read(self, navigation):
        navigation.present(ModalSlot.SHEET, Settings())
        assert navigation.sheet == ModalPresentation(Settings())
        assert navigation.sheet.destination == Settings()
        assert navigation.sheet.id == Settings().id

    def test_slot_by_name(self, navigation):
        navigation.present("popover", Profile("1"))
        assert navigation.popover.destination == Profile("1")
        assert navigation.modal("popover") is navigation.popover

    def test_replace_does_not_call_previous_callback(self, navigation):
        calls = []
        navigation.present_sheet(Profile("x"), on_dismiss=lambda: calls.append("x"))
        navigation.present_sheet(Profile("y"), on_dismiss=lambda: calls.append("y"))
        assert navigation.sheet.destination == Profile("y")
        assert calls == []

        navigation.dismiss_sheet()
        assert calls == ["y"]

    def test_dismiss_calls_callback_once(self, navigation):
        calls = []
        navigation.present_full_screen_cover(Settings(), on_dismiss=lambda: calls.append(1))
        navigation.dismiss(ModalSlot.FULL_SCREEN_COVER)
        navigation.dismiss(ModalSlot.FULL_SCREEN_COVER)
        assert navigation.full_screen_cover is None
        assert calls == [1]

    def test_dismiss_empty_slot_is_noop(self, navigation, changes):
        navigation.dismiss_popover()
        assert navigation.popover is None
        assert changes == []

    def test_dismiss_without_callback(self, navigation):
        navigation.present_popover(Settings())
        navigation.dismiss_popover()
        assert navigation.popover is None

    def test_slots_are_independent(self, navigation):
        navigation.present_sheet(Profile("1"))
        navigation.present_full_screen_cover(Profile("2"))
        navigation.present_popover(Profile("3"))
        navigation.dismiss_full_screen_cover()
        assert navigation.sheet.destination == Profile("1")
        assert navigation.full_screen_cover is None
        assert navigation.popover.destination == Profile("3")

    def test_slot_is_clear_when_callback_runs(self, navigation):
        seen = []
        navigation.present_sheet(Settings(), on_dismiss=lambda: seen.append(navigation.sheet))
        navigation.dismiss_sheet()
        assert seen == [None]

    def test_callback_may_push(self, navigation):
        navigation.present_sheet(Settings(), on_dismiss=lambda: navigation.push(Profile("1")))
        navigation.dismiss_sheet()
        assert navigation.path == [Profile("1")]

    def test_callback_may_present_again(self, navigation):
        navigation.present_sheet(Settings(), on_dismiss=lambda: navigation.present_sheet(Profile("next")))
        navigation.dismiss_sheet()
        assert navigation.sheet.destination == Profile("next")

    def test_callback_that_dismisses_again_runs_once(self, navigation):
        calls = []

        def on_dismiss():
            calls.append(1)
            navigation.dismiss_sheet()

        navigation.present_sheet(Settings(), on_dismiss=on_dismiss)
        navigation.dismiss_sheet()
        assert calls == [1]

    def test_callback_error_leaves_slot_clear(self, navigation):
        def on_dismiss():
            raise RuntimeError("boom")

        navigation.present_sheet(Settings(), on_dismiss=on_dismiss)
        with pytest.raises(RuntimeError):
            navigation.dismiss_sheet()
        assert navigation.sheet is None

    def test_callback_runs_when_listener_fails(self, navigation):
        calls = []

        def failing_listener(name):
            raise RuntimeError(name)

        navigation.present_sheet(Settings(), on_dismiss=lambda: calls.append(1))
        navigation.subscribe(failing_listener)
        with pytest.raises(RuntimeError):
            navigation.dismiss_sheet()
        assert navigation.sheet is None
        assert calls == [1]

    def test_unknown_slot(self, navigation):
        with pytest.raises(ValueError):
            navigation.present("drawer", Settings())

    def test_presentation_equality_ignores_callback(self):
        assert ModalPresentation(Settings(), lambda: None) == ModalPresentation(Settings())


class TestAlert:
    def test_show_replaces(self, navigation):
        first = Alert("A")
        second = Alert("B")
        navigation.show_alert(first)
        navigation.show_alert(second)
        assert navigation.alert is second

    def test_clear_is_idempotent(self, navigation, changes):
        navigation.show_alert(Alert("A"))
        navigation.clear_alert()
        navigation.clear_alert()
        assert navigation.alert is None
        assert changes == ["alert", "alert"]

    def test_alerts_with_same_title_are_distinct(self):
        assert Alert("Oops") != Alert("Oops")

    def test_button_runs_action_and_closes(self, navigation):
        calls = []
        retry = AlertButton("Retry", action=lambda: calls.append("retry"))
        navigation.show_alert(Alert("Failed", "Try again?", (retry, AlertButton("Cancel", role=ButtonRole.CANCEL))))
        navigation.invoke_alert_button(retry)
        assert calls == ["retry"]
        assert navigation.alert is None

    def test_button_without_action_closes(self, navigation):
        ok = AlertButton("OK")
        navigation.show_alert(Alert("Saved", buttons=(ok,)))
        navigation.invoke_alert_button(ok)
        assert navigation.alert is None

    def test_stale_button_is_ignored(self, navigation):
        calls = []
        stale = AlertButton("Old", action=lambda: calls.append(1))
        navigation.show_alert(Alert("Old", buttons=(stale,)))
        current = Alert("New")
        navigation.show_alert(current)
        navigation.invoke_alert_button(stale)
        assert calls == []
        assert navigation.alert is current

    def test_alert_shown_by_action_is_closed_too(self, navigation, changes):
        button = AlertButton("Go", action=lambda: navigation.show_alert(Alert("Done")))
        navigation.show_alert(Alert("Start", buttons=(button,)))
        changes.clear()
        navigation.invoke_alert_button(button)
        assert navigation.alert is None
        assert changes == ["alert", "alert"]

    def test_action_error_still_closes_alert(self, navigation):
        def fail():
            raise RuntimeError("boom")

        button = AlertButton("Go", action=fail)
        navigation.show_alert(Alert("Start", buttons=(button,)))
        with pytest.raises(RuntimeError):
            navigation.invoke_alert_button(button)
        assert navigation.alert is None


class TestConfirmationDialog:
    def _actions(self, calls):
        return [
            DialogAction("Edit", lambda: calls.append("edit")),
            DialogAction("Delete", lambda: calls.append("delete"), role=ButtonRole.DESTRUCTIVE),
            DialogAction("Cancel", lambda: calls.append("cancel"), role=ButtonRole.CANCEL),
        ]

    def test_show(self, navigation):
        actions = self._actions([])
        navigation.show_confirmation_dialog("Photo", "What now?", actions)
        dialog = navigation.confirmation_dialog
        assert dialog.title == "Photo"
        assert dialog.message == "What now?"
        assert dialog.actions == tuple(actions)

    def test_any_action_closes_dialog(self, navigation):
        calls = []
        actions = self._actions(calls)
        navigation.show_confirmation_dialog("Photo", actions=actions)
        navigation.invoke_dialog_action(actions[1])
        assert calls == ["delete"]
        assert navigation.confirmation_dialog is None

    def test_non_cancel_action_closes_dialog(self, navigation):
        calls = []
        actions = self._actions(calls)
        navigation.show_confirmation_dialog("Photo", actions=actions)
        navigation.invoke_dialog_action(actions[0])
        assert calls == ["edit"]
        assert navigation.confirmation_dialog is None

    def test_action_after_close_is_noop(self, navigation):
        calls = []
        actions = self._actions(calls)
        navigation.show_confirmation_dialog("Photo", actions=actions)
        navigation.invoke_dialog_action(actions[2])
        navigation.invoke_dialog_action(actions[2])
        assert calls == ["cancel"]

    def test_foreign_action_is_ignored(self, navigation):
        calls = []
        navigation.show_confirmation_dialog("Photo", actions=self._actions(calls))
        stranger = DialogAction("Edit", lambda: calls.append("stranger"))
        navigation.invoke_dialog_action(stranger)
        assert calls == []
        assert navigation.confirmation_dialog is not None

    def test_actions_with_same_title_are_distinct(self):
        first = DialogAction("Share", lambda: None)
        second = DialogAction("Share", lambda: None)
        assert first != second
        assert first.id != second.id

    def test_show_replaces(self, navigation):
        navigation.show_confirmation_dialog("First")
        navigation.show_confirmation_dialog("Second")
        assert navigation.confirmation_dialog.title == "Second"

    def test_empty_actions_allowed(self, navigation):
        navigation.show_confirmation_dialog("Nothing to do")
        assert navigation.confirmation_dialog.actions == ()

    def test_dialog_shown_by_action_is_closed_too(self, navigation):
        seen = []
        chained = DialogAction(
            "Delete",
            lambda: (
                navigation.show_confirmation_dialog("Are you sure?"),
                seen.append(navigation.confirmation_dialog.title),
            ),
            role=ButtonRole.DESTRUCTIVE,
        )
        navigation.show_confirmation_dialog("Photo", actions=[chained])
        navigation.invoke_dialog_action(chained)
        assert seen == ["Are you sure?"]
        assert navigation.confirmation_dialog is None

    def test_action_error_still_closes_dialog(self, navigation):
        def fail():
            raise RuntimeError("boom")

        action = DialogAction("Go", fail)
        navigation.show_confirmation_dialog("Photo", actions=[action])
        with pytest.raises(RuntimeError):
            navigation.invoke_dialog_action(action)
        assert navigation.confirmation_dialog is None

    def test_dismiss_runs_no_action(self, navigation):
        calls = []
        navigation.show_confirmation_dialog("Photo", actions=self._actions(calls))
        navigation.dismiss_confirmation_dialog()
        assert calls == []
        assert navigation.confirmation_dialog is None


class TestSubscribe:
    def test_reports_each_field(self, navigation, changes):
        navigation.push(Settings())
        navigation.present_sheet(Settings())
        navigation.present_full_screen_cover(Settings())
        navigation.present_popover(Settings())
        navigation.show_alert(Alert("A"))
        navigation.show_confirmation_dialog("D")
        assert changes == [
            "path",
            "sheet",
            "full_screen_cover",
            "popover",
            "alert",
            "confirmation_dialog",
        ]

    def test_unsubscribe(self, navigation):
        seen = []
        unsubscribe = navigation.subscribe(seen.append)
        navigation.push(Settings())
        unsubscribe()
        unsubscribe()
        navigation.pop()
        assert seen == ["path"]

    def test_listener_sees_updated_state(self, navigation):
        tops = []
        navigation.subscribe(lambda name: tops.append(navigation.path.top))
        navigation.push(Profile("1"))
        navigation.pop()
        assert tops == [Profile("1"), None]
