"""Tests for the command line entry point."""

import asyncio
from uuid import UUID, uuid4

import pytest

from fair_verifier.cli import get_parser, main, predict_rounds
from fair_verifier.models.dc_models import GameTypeModel


class TestPredictRounds:
    def test_consecutive_nonces(self):
        lines = predict_rounds("clientXYZ", "serverABC", 0, 3)
        assert len(lines) == 3
        assert lines[0].startswith("nonce=0 number=6 color=Red (red)")
        assert lines[1].startswith("nonce=1 number=2 color=Red (red)")
        assert lines[2].startswith("nonce=2 number=3 color=Green (green)")

    def test_missing_seed(self):
        assert predict_rounds("", "serverABC", 0, 2) == [
            "Enter client seed and server seed to reveal prediction"
        ]


class TestMain:
    def test_predict_command(self, capsys):
        code = main(["predict", "--server-seed", "serverABC", "--client-seed", "clientXYZ"])
        assert code == 0
        assert "number=6 color=Red" in capsys.readouterr().out

    def test_negative_nonce(self, capsys):
        code = main(
            ["predict", "--server-seed", "s", "--client-seed", "c", "--nonce", "-1"]
        )
        assert code == 2

    def test_add_credential_arguments(self):
        args = get_parser().parse_args(
            [
                "add-credential",
                "--username", "alice",
                "--secret-code", "s3cret",
                "--game-type", "aviator",
                "--expires-in-days", "7",
                "--inactive",
            ]
        )
        assert args.game_type == GameTypeModel.aviator
        assert args.expires_in_days == 7.0
        assert args.inactive

    def test_unknown_game_type(self):
        with pytest.raises(SystemExit):
            get_parser().parse_args(
                ["add-credential", "--username", "a", "--secret-code", "b", "--game-type", "dice"]
            )


def read_credential(credential_id, game_type):
    from fair_verifier.authentication.credential_crud import ReadCredential
    from fair_verifier.db import Session

    async def read():
        async with Session() as session:
            return await ReadCredential.read_credential_by_id(credential_id, game_type, session)

    return asyncio.run(read())


class TestCredentialAdministration:
    def add(self, capsys, *extra):
        username = f"cli-{uuid4().hex[:8]}"
        code = main(
            ["add-credential", "--username", username, "--secret-code", "s3cret", "--game-type", "mines", *extra]
        )
        assert code == 0
        return UUID(capsys.readouterr().out.split()[0])

    def test_deactivate_and_activate(self, capsys):
        credential_id = self.add(capsys)

        assert main(["deactivate", "--credential-id", str(credential_id)]) == 0
        assert not read_credential(credential_id, GameTypeModel.mines).is_active

        assert main(["activate", "--credential-id", str(credential_id)]) == 0
        assert read_credential(credential_id, GameTypeModel.mines).is_active

    def test_set_expiry_and_remove_it(self, capsys):
        credential_id = self.add(capsys)

        assert main(["set-expiry", "--credential-id", str(credential_id), "--expires-in-days", "-1"]) == 0
        assert read_credential(credential_id, GameTypeModel.mines).expires_at is not None

        assert main(["set-expiry", "--credential-id", str(credential_id), "--never"]) == 0
        assert read_credential(credential_id, GameTypeModel.mines).expires_at is None

    def test_unknown_credential(self, capsys):
        assert main(["deactivate", "--credential-id", str(uuid4())]) == 1
        assert "No credential with id" in capsys.readouterr().out

    def test_expiry_value_required(self):
        with pytest.raises(SystemExit):
            get_parser().parse_args(["set-expiry", "--credential-id", str(uuid4())])
