import argparse
import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional
from uuid import UUID

from fair_verifier.domain.outcome_rules import color_category
from fair_verifier.domain.prediction_panel import PredictionPanel
from fair_verifier.models.dc_models import GameTypeModel


def predict_rounds(client_seed: str, server_seed: str, nonce: int, rounds: int) -> List[str]:
    """Describe the outcomes of `rounds` consecutive nonces starting at `nonce`"""
    panel = PredictionPanel(client_seed, server_seed, nonce)
    lines = []
    for _ in range(rounds):
        prediction = panel.to_prediction()
        if prediction.status != "ready":
            return ["Enter client seed and server seed to reveal prediction"]
        lines.append(
            f"nonce={panel.nonce} number={prediction.number} "
            f"color={prediction.color.value} ({color_category(prediction.color)}) "
            f"hash={prediction.digest}"
        )
        panel.increment_nonce()
    return lines


async def add_credential(
    username: str,
    secret_code: str,
    game_type: GameTypeModel,
    expires_in_days: Optional[float],
    is_active: bool,
) -> None:
    from fair_verifier.authentication.credential_crud import CreateCredential
    from fair_verifier.db import Session, create_tables

    await create_tables()
    expires_at = None
    if expires_in_days is not None:
        expires_at = datetime.now(timezone.utc) + timedelta(days=expires_in_days)
    async with Session() as session:
        credential = await CreateCredential.create_credential(
            username, secret_code, game_type, session, is_active=is_active, expires_at=expires_at
        )
    print(credential.id, credential.username, credential.game_type.value, credential.expires_at)


async def set_credential_active(credential_id: UUID, is_active: bool) -> bool:
    from fair_verifier.authentication.credential_crud import UpdateCredential
    from fair_verifier.db import Session, create_tables

    await create_tables()
    async with Session() as session:
        return await UpdateCredential.set_active(credential_id, is_active, session)


async def set_credential_expiry(credential_id: UUID, expires_in_days: Optional[float]) -> bool:
    from fair_verifier.authentication.credential_crud import UpdateCredential
    from fair_verifier.db import Session, create_tables

    await create_tables()
    expires_at = None
    if expires_in_days is not None:
        expires_at = datetime.now(timezone.utc) + timedelta(days=expires_in_days)
    async with Session() as session:
        return await UpdateCredential.set_expires_at(credential_id, expires_at, session)


async def set_contact(whatsapp_number: str) -> None:
    from fair_verifier.admin_contact_crud import UpdateAdminContact
    from fair_verifier.db import Session, create_tables
    from fair_verifier.routers.dependencies import redis

    await create_tables()
    try:
        async with Session() as session:
            contact = await UpdateAdminContact.update_admin_contact(whatsapp_number, session, redis)
    finally:
        await redis.aclose()
    if contact is None:
        print("Admin contact could not be saved")
        return
    print(contact.whatsapp_number)


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Provably fair verification tools")
    subparsers = parser.add_subparsers(dest="command", required=True)

    predict = subparsers.add_parser("predict", help="Recompute color prediction outcomes")
    predict.add_argument("--server-seed", type=str, help="Server seed", required=True)
    predict.add_argument("--client-seed", type=str, help="Client seed", required=True)
    predict.add_argument("--nonce", type=int, default=0, help="First nonce")
    predict.add_argument("--rounds", type=int, default=1, help="Number of consecutive nonces")

    credential = subparsers.add_parser("add-credential", help="Store a game credential")
    credential.add_argument("--username", type=str, help="Username", required=True)
    credential.add_argument("--secret-code", type=str, help="Secret code", required=True)
    credential.add_argument(
        "--game-type", type=GameTypeModel, choices=list(GameTypeModel), required=True
    )
    credential.add_argument("--expires-in-days", type=float, default=None)
    credential.add_argument("--inactive", action="store_true", help="Store as deactivated")

    for command, help_text in (
        ("deactivate", "Revoke a credential, open sessions end on their next visit"),
        ("activate", "Re-enable a deactivated credential"),
    ):
        active = subparsers.add_parser(command, help=help_text)
        active.add_argument("--credential-id", type=UUID, required=True)

    expiry = subparsers.add_parser("set-expiry", help="Change when a credential expires")
    expiry.add_argument("--credential-id", type=UUID, required=True)
    expiry_value = expiry.add_mutually_exclusive_group(required=True)
    expiry_value.add_argument("--expires-in-days", type=float)
    expiry_value.add_argument("--never", action="store_true", help="Remove the expiry")

    contact = subparsers.add_parser("set-contact", help="Change the admin WhatsApp number")
    contact.add_argument("--number", type=str, help="WhatsApp number", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP service")
    serve.add_argument("--host", type=str, default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8080)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = get_parser().parse_args(argv)
    if args.command == "predict":
        if args.nonce < 0 or args.rounds < 1:
            print("nonce must be >= 0 and rounds >= 1")
            return 2
        for line in predict_rounds(args.client_seed, args.server_seed, args.nonce, args.rounds):
            print(line)
    elif args.command == "add-credential":
        logging.basicConfig(level=logging.INFO)
        asyncio.run(
            add_credential(
                args.username,
                args.secret_code,
                args.game_type,
                args.expires_in_days,
                not args.inactive,
            )
        )
    elif args.command in ("deactivate", "activate"):
        logging.basicConfig(level=logging.INFO)
        if not asyncio.run(set_credential_active(args.credential_id, args.command == "activate")):
            print(f"No credential with id {args.credential_id}")
            return 1
        print(f"{args.credential_id} {args.command}d")
    elif args.command == "set-expiry":
        logging.basicConfig(level=logging.INFO)
        expires_in_days = None if args.never else args.expires_in_days
        if not asyncio.run(set_credential_expiry(args.credential_id, expires_in_days)):
            print(f"No credential with id {args.credential_id}")
            return 1
        print(f"{args.credential_id} expiry updated")
    elif args.command == "set-contact":
        logging.basicConfig(level=logging.INFO)
        asyncio.run(set_contact(args.number))
    elif args.command == "serve":
        import uvicorn

        uvicorn.run("fair_verifier.main:app", host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
