"""Tests for SmartcastClient accessors and command dispatch over a fake transport."""

import pytest

from smartcast_client import (
    SmartcastClient,
    SmartcastClientConfig,
    SmartcastErrorKind,
    SmartcastResultError,
    SmartcastTransportError,
)
from smartcast_client.protocol import paths

from fakes import success, failure

AUDIO_SETTINGS = success(ITEMS=[
    {"CNAME": "volume", "NAME": "Volume", "TYPE": "T_VALUE_V1", "VALUE": 17, "HASHVAL": 3412},
    {"CNAME": "mute", "NAME": "Mute", "TYPE": "T_LIST_X_V1", "VALUE": "Off", "HASHVAL": 3413},
])

INPUT_LIST = success(ITEMS=[
    {"CNAME": "cast", "NAME": "CAST", "VALUE": {"NAME": "CAST", "METADATA": ""}, "HASHVAL": 1},
    {"CNAME": "hdmi1", "NAME": "hdmi1", "VALUE": {"NAME": "HDMI-1", "METADATA": ""}, "HASHVAL": 2},
])

CURRENT_INPUT = success(ITEMS=[
    {"CNAME": "current_input", "NAME": "Current Input", "VALUE": "CAST", "HASHVAL": 889900},
])


class TestTransact:

    @pytest.mark.asyncio
    async def test_auth_header_on_authorized_requests(self, client, fake_transport):
        await client.control.menu()
        await client.power.current_mode()

        assert fake_transport.requests[0].auth_token == "test-token"
        assert fake_transport.requests[1].path == paths.POWER_MODE
        assert fake_transport.requests[1].auth_token is None

    @pytest.mark.asyncio
    async def test_status_is_not_interpreted(self, client, fake_transport):
        fake_transport.responses[("GET", paths.MUTE)] = failure("REQUIRES_PAIRING")

        response = await client.control.volume.get_mute_state()

        assert not response.is_success
        assert response.result == "REQUIRES_PAIRING"

    def test_auth_token_from_config(self, fake_transport):
        config = SmartcastClientConfig(auth_token="from-config")
        assert SmartcastClient(fake_transport, config=config).auth_token == "from-config"
        assert SmartcastClient(fake_transport, auth_token="explicit", config=config).auth_token == "explicit"

    @pytest.mark.asyncio
    async def test_context_manager_closes_transport(self, fake_transport):
        async with SmartcastClient(fake_transport, config=SmartcastClientConfig()):
            pass
        assert fake_transport.closed


class TestCommandDispatch:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("group,method,codes", [
        ("control.volume", "down", (5, 0)),
        ("control.volume", "up", (5, 1)),
        ("control.volume", "unmute", (5, 2)),
        ("control.volume", "mute", (5, 3)),
        ("control.volume", "toggle_mute", (5, 4)),
        ("control.input", "cycle", (7, 1)),
        ("control.channel", "down", (8, 0)),
        ("control.channel", "up", (8, 1)),
        ("control.channel", "previous", (8, 2)),
        ("control.power", "off", (11, 0)),
        ("control.power", "on", (11, 1)),
        ("control.power", "toggle", (11, 2)),
        ("control.media.seek", "forward", (2, 0)),
        ("control.media.seek", "back", (2, 1)),
        ("control.media", "pause", (2, 2)),
        ("control.media", "play", (2, 3)),
        ("control.media", "cc", (4, 4)),
        ("control", "menu", (4, 8)),
        ("control", "info", (4, 6)),
        ("control", "smartcast", (4, 3)),
    ])
    async def test_key_methods(self, client, fake_transport, group, method, codes):
        target = client
        for part in group.split("."):
            target = getattr(target, part)

        await getattr(target, method)()

        assert len(fake_transport.requests) == 1
        request = fake_transport.requests[0]
        assert (request.method, request.path) == ("PUT", paths.KEY_COMMAND)
        assert request.body == {"KEYLIST": [{"CODESET": codes[0], "CODE": codes[1], "ACTION": "KEYPRESS"}]}

    @pytest.mark.asyncio
    async def test_key_command_with_action(self, client, fake_transport):
        await client.control.key_command(3, 7, "KEYDOWN")

        assert fake_transport.requests[0].body == {"KEYLIST": [{"CODESET": 3, "CODE": 7, "ACTION": "KEYDOWN"}]}

    @pytest.mark.asyncio
    async def test_send_key_unknown_name_sends_nothing(self, client, fake_transport):
        with pytest.raises(SmartcastResultError) as info:
            await client.control.send_key("self_destruct")

        assert info.value.kind == SmartcastErrorKind.VALIDATION
        assert fake_transport.requests == []

    @pytest.mark.asyncio
    async def test_response_is_passed_through(self, client, fake_transport):
        fake_transport.responses[("PUT", paths.KEY_COMMAND)] = success(URI="/key_command/")

        response = await client.control.power.toggle()

        assert response.raw == success(URI="/key_command/")


class TestVolume:

    @pytest.mark.asyncio
    async def test_set_echoes_hashval_of_volume_read(self, client, fake_transport):
        fake_transport.responses[("GET", paths.AUDIO_SETTINGS)] = AUDIO_SETTINGS
        fake_transport.responses[("PUT", paths.VOLUME_WRITE)] = success()

        response = await client.control.volume.set(42)

        assert response.is_success
        writes = fake_transport.requests_to(paths.VOLUME_WRITE, "PUT")
        assert len(writes) == 1
        assert writes[0].body == {"REQUEST": "MODIFY", "HASHVAL": 3412, "VALUE": 42}
        assert isinstance(writes[0].body["VALUE"], int)
        assert writes[0].auth_token == "test-token"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value,expected", [(41.5, 42), (41.4, 41), (0, 0), (100, 100), (99.6, 100)])
    async def test_set_rounds(self, client, fake_transport, value, expected):
        fake_transport.responses[("GET", paths.AUDIO_SETTINGS)] = AUDIO_SETTINGS

        await client.control.volume.set(value)

        assert fake_transport.requests_to(paths.VOLUME_WRITE)[0].body["VALUE"] == expected

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [150, -1, 100.01, float("nan")])
    async def test_out_of_range_fails_before_any_request(self, client, fake_transport, value):
        fake_transport.responses[("GET", paths.AUDIO_SETTINGS)] = AUDIO_SETTINGS

        with pytest.raises(SmartcastResultError) as info:
            await client.control.volume.set(value)

        assert info.value.kind == SmartcastErrorKind.VALIDATION
        assert fake_transport.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["42", None, True])
    async def test_non_numeric_fails_before_any_request(self, client, fake_transport, value):
        with pytest.raises(SmartcastResultError) as info:
            await client.control.volume.set(value)

        assert info.value.kind == SmartcastErrorKind.VALIDATION
        assert fake_transport.requests == []

    @pytest.mark.asyncio
    async def test_missing_volume_item_is_not_found(self, client, fake_transport):
        fake_transport.responses[("GET", paths.AUDIO_SETTINGS)] = success(ITEMS=[])

        with pytest.raises(SmartcastResultError) as info:
            await client.control.volume.set(10)

        assert info.value.kind == SmartcastErrorKind.NOT_FOUND
        assert fake_transport.requests_to(paths.VOLUME_WRITE) == []

    @pytest.mark.asyncio
    async def test_failed_settings_read(self, client, fake_transport):
        fake_transport.responses[("GET", paths.AUDIO_SETTINGS)] = failure("REQUIRES_PAIRING")

        with pytest.raises(SmartcastResultError) as info:
            await client.control.volume.set(10)

        assert info.value.kind == SmartcastErrorKind.GENERIC
        assert fake_transport.requests_to(paths.VOLUME_WRITE) == []

    @pytest.mark.asyncio
    async def test_stale_hashval_is_surfaced_not_retried(self, client, fake_transport):
        fake_transport.responses[("GET", paths.AUDIO_SETTINGS)] = AUDIO_SETTINGS
        fake_transport.responses[("PUT", paths.VOLUME_WRITE)] = failure("HASHVAL_ERROR")

        response = await client.control.volume.set(30)

        assert response.result == "HASHVAL_ERROR"
        assert len(fake_transport.requests_to(paths.VOLUME_WRITE)) == 1

    @pytest.mark.asyncio
    async def test_get_paths(self, client, fake_transport):
        await client.control.volume.get()
        await client.control.volume.get_mute_state()

        assert [r.path for r in fake_transport.requests] == [paths.VOLUME_READ, paths.MUTE]


class TestInput:

    @pytest.fixture
    def input_transport(self, fake_transport):
        fake_transport.responses[("GET", paths.INPUT_LIST)] = INPUT_LIST
        fake_transport.responses[("GET", paths.CURRENT_INPUT)] = CURRENT_INPUT
        fake_transport.responses[("PUT", paths.CURRENT_INPUT)] = success()
        return fake_transport

    @pytest.mark.asyncio
    async def test_set_by_display_name_sends_internal_name(self, client, input_transport):
        await client.input.set("HDMI-1")

        writes = input_transport.requests_to(paths.CURRENT_INPUT, "PUT")
        assert len(writes) == 1
        assert writes[0].body == {"REQUEST": "MODIFY", "VALUE": "hdmi1", "HASHVAL": 889900}

    @pytest.mark.asyncio
    async def test_set_is_case_insensitive(self, client, input_transport):
        await client.input.set("cast")

        assert input_transport.requests_to(paths.CURRENT_INPUT, "PUT")[0].body["VALUE"] == "CAST"

    @pytest.mark.asyncio
    async def test_set_unknown_input_is_not_found(self, client, input_transport):
        with pytest.raises(SmartcastResultError) as info:
            await client.input.set("nonexistent")

        assert info.value.kind == SmartcastErrorKind.NOT_FOUND
        assert "nonexistent" in str(info.value)
        assert input_transport.requests_to(paths.CURRENT_INPUT, "PUT") == []

    @pytest.mark.asyncio
    async def test_non_string_name_fails_before_any_request(self, client, input_transport):
        with pytest.raises(SmartcastResultError) as info:
            await client.input.set(None)

        assert info.value.kind == SmartcastErrorKind.VALIDATION
        assert input_transport.requests == []

    @pytest.mark.asyncio
    async def test_failed_lookup_exposes_both_responses(self, client, input_transport):
        input_transport.responses[("GET", paths.CURRENT_INPUT)] = failure("REQUIRES_PAIRING")

        with pytest.raises(SmartcastResultError) as info:
            await client.input.set("HDMI-1")

        assert info.value.kind == SmartcastErrorKind.GENERIC
        assert info.value.payload == {"list": INPUT_LIST, "current": failure("REQUIRES_PAIRING")}
        assert input_transport.requests_to(paths.CURRENT_INPUT, "PUT") == []

    @pytest.mark.asyncio
    async def test_lookup_transport_failure_propagates(self, client, input_transport):
        input_transport.responses[("GET", paths.INPUT_LIST)] = SmartcastTransportError("boom", status=500)

        with pytest.raises(SmartcastTransportError):
            await client.input.set("HDMI-1")

        assert input_transport.requests_to(paths.CURRENT_INPUT, "PUT") == []

    @pytest.mark.asyncio
    async def test_list_and_current(self, client, input_transport):
        inputs = (await client.input.list()).input_items()
        current = (await client.input.current()).first_setting()

        assert [(x.name, x.display_name) for x in inputs] == [("CAST", "CAST"), ("hdmi1", "HDMI-1")]
        assert current.value == "CAST"


class TestSettings:

    @pytest.mark.asyncio
    async def test_timer_set_reads_then_modifies(self, client, fake_transport):
        fake_transport.responses[("GET", paths.SLEEP_TIMER)] = success(ITEMS=[
            {"CNAME": "sleep_timer", "VALUE": "Off", "HASHVAL": 55}])
        fake_transport.responses[("PUT", paths.SLEEP_TIMER)] = success()

        await client.settings.timers.sleep_timer.set("30 Minutes")

        write = fake_transport.requests_to(paths.SLEEP_TIMER, "PUT")[0]
        assert write.body == {"REQUEST": "MODIFY", "HASHVAL": 55, "VALUE": "30 Minutes"}

    @pytest.mark.asyncio
    async def test_timer_set_requires_successful_read(self, client, fake_transport):
        with pytest.raises(SmartcastResultError):
            await client.settings.timers.auto_power_off_timer.set("10 Minutes")

        assert fake_transport.requests_to(paths.AUTO_POWER_OFF_TIMER, "PUT") == []

    @pytest.mark.asyncio
    async def test_blank_screen_execute(self, client, fake_transport):
        fake_transport.responses[("GET", paths.BLANK_SCREEN)] = success(ITEMS=[
            {"CNAME": "blank_screen", "VALUE": "Blank Screen", "HASHVAL": 8}])

        await client.settings.timers.blank_screen.execute()

        write = fake_transport.requests_to(paths.BLANK_SCREEN, "PUT")[0]
        assert write.body == {"REQUEST": "ACTION", "HASHVAL": 8}

    @pytest.mark.asyncio
    async def test_read_paths(self, client, fake_transport):
        await client.settings.audio.get()
        await client.settings.timers.get()
        await client.settings.timers.sleep_timer.get()
        await client.settings.timers.auto_power_off_timer.get()
        await client.settings.timers.blank_screen.get()

        assert [r.path for r in fake_transport.requests] == [
            paths.AUDIO_SETTINGS,
            paths.TIMERS,
            paths.SLEEP_TIMER,
            paths.AUTO_POWER_OFF_TIMER,
            paths.BLANK_SCREEN,
        ]
        assert all(r.method == "GET" for r in fake_transport.requests)
