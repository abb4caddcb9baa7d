"""End-to-end tests: SmartcastClient over HTTP against the device emulator."""

import pytest

from smartcast_client import (
    PairingState,
    SmartcastErrorKind,
    SmartcastResultError,
    smartcast_connect,
)
from smartcast_client.emulator import SmartcastEmulator
from smartcast_client.protocol import paths


async def pair(client, emulator):
    await client.pairing.initiate("Test Suite", "test-suite-1")
    await client.pairing.pair(emulator.pin)


class TestPairingFlow:

    @pytest.mark.asyncio
    async def test_pair_then_use_authorized_endpoint(self, emulator, emulator_client):
        unauthorized = await emulator_client.control.volume.get()
        assert unauthorized.result == "REQUIRES_PAIRING"

        await pair(emulator_client, emulator)

        assert emulator_client.pairing.state == PairingState.PAIRED
        assert emulator_client.auth_token in emulator.auth_tokens
        volume = await emulator_client.control.volume.get()
        assert volume.is_success
        assert volume.first_setting().value == 20

    @pytest.mark.asyncio
    async def test_second_client_is_blocked_while_pin_is_shown(self, emulator, emulator_client):
        await emulator_client.pairing.initiate()

        async with await smartcast_connect(emulator.host_string, auth_token="") as other:
            with pytest.raises(SmartcastResultError) as info:
                await other.pairing.initiate()

        assert info.value.kind == SmartcastErrorKind.BLOCKED

    @pytest.mark.asyncio
    async def test_wrong_pin_then_right_pin(self, emulator, emulator_client):
        await emulator_client.pairing.initiate()

        with pytest.raises(SmartcastResultError) as info:
            await emulator_client.pairing.pair("0000")
        assert info.value.result == "PAIRING_DENIED"

        await emulator_client.pairing.pair(emulator.pin)
        assert emulator_client.pairing.state == PairingState.PAIRED

    @pytest.mark.asyncio
    async def test_persisted_token(self):
        async with SmartcastEmulator(auth_tokens=["persisted"]) as emulator:
            async with await smartcast_connect(emulator.host_string, auth_token="persisted", check_power=True) as client:
                response = await client.input.current()

        assert response.is_success


class TestSettingsFlow:

    @pytest.mark.asyncio
    async def test_set_volume(self, emulator, emulator_client):
        await pair(emulator_client, emulator)

        response = await emulator_client.control.volume.set(42)

        assert response.is_success
        assert emulator.volume == 42

    @pytest.mark.asyncio
    async def test_volume_validation_sends_nothing(self, emulator, emulator_client):
        await pair(emulator_client, emulator)
        before = len(emulator.requests)

        for value in (150, -1):
            with pytest.raises(SmartcastResultError):
                await emulator_client.control.volume.set(value)

        assert len(emulator.requests) == before

    @pytest.mark.asyncio
    async def test_stale_hashval_is_rejected_by_device(self, emulator, emulator_client):
        await pair(emulator_client, emulator)
        item = (await emulator_client.settings.audio.get()).find_setting("volume")
        await emulator_client.control.volume.up()

        response = await emulator_client.transact(
            "PUT", paths.VOLUME_WRITE, {"REQUEST": "MODIFY", "HASHVAL": item.hashval, "VALUE": 5})

        assert response.result == "HASHVAL_ERROR"
        assert emulator.volume == 21

    @pytest.mark.asyncio
    async def test_set_input_by_display_name(self, emulator, emulator_client):
        await pair(emulator_client, emulator)

        await emulator_client.input.set("blu-ray")

        assert emulator.current_input == "HDMI-1"
        put = emulator.requests_to(paths.CURRENT_INPUT, "PUT")[0]
        assert put.body["VALUE"] == "HDMI-1"

    @pytest.mark.asyncio
    async def test_set_unknown_input(self, emulator, emulator_client):
        await pair(emulator_client, emulator)

        with pytest.raises(SmartcastResultError) as info:
            await emulator_client.input.set("nonexistent")

        assert info.value.kind == SmartcastErrorKind.NOT_FOUND
        assert emulator.requests_to(paths.CURRENT_INPUT, "PUT") == []

    @pytest.mark.asyncio
    async def test_sleep_timer(self, emulator, emulator_client):
        await pair(emulator_client, emulator)

        response = await emulator_client.settings.timers.sleep_timer.set("60 Minutes")

        assert response.is_success
        current = await emulator_client.settings.timers.sleep_timer.get()
        assert current.first_setting().value == "60 Minutes"


class TestKeyCommands:

    @pytest.mark.asyncio
    async def test_keys_reach_device(self, emulator, emulator_client):
        await pair(emulator_client, emulator)

        await emulator_client.control.power.off()
        await emulator_client.control.volume.mute()
        await emulator_client.control.input.cycle()

        assert emulator.key_commands == [(11, 0, "KEYPRESS"), (5, 3, "KEYPRESS"), (7, 1, "KEYPRESS")]
        assert not emulator.power_on
        assert emulator.muted
        assert emulator.current_input == "HDMI-1"
        power = await emulator_client.power.current_mode()
        assert power.items[0]["VALUE"] == 0
