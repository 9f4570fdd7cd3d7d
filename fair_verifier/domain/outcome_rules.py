"""Outcome rules for the color prediction game.

The hash algorithm, the delimiter and the color table are fixed by the game
being verified. Changing any of them makes the recomputed outcome disagree with
the real round.
"""
import hashlib

from fair_verifier.models.dc_models import ColorModel, OutcomeModel

SEED_DELIMITER = ":"
OUTCOME_MODULUS = 10
DIGEST_PREFIX_LENGTH = 2

GREEN_NUMBERS = frozenset({1, 3, 7, 9})


def combine_seeds(client_seed: str, server_seed: str, nonce: int) -> str:
    """Return "<server_seed>:<client_seed>:<nonce>"."""
    if nonce < 0:
        raise ValueError(f"nonce must be non-negative, got {nonce}")
    return SEED_DELIMITER.join((server_seed, client_seed, str(nonce)))


def seed_digest(combined_seed: str) -> str:
    return hashlib.sha256(combined_seed.encode("utf-8")).hexdigest()


def number_from_digest(digest: str) -> int:
    """Reduce the first byte of the hex digest to a number in [0, 9]."""
    return int(digest[:DIGEST_PREFIX_LENGTH], 16) % OUTCOME_MODULUS


def color_for_number(number: int) -> ColorModel:
    # 0 and 5 are checked first, the remaining even numbers fall through to red
    if number == 0:
        return ColorModel.red_violet
    if number == 5:
        return ColorModel.green_violet
    if number in GREEN_NUMBERS:
        return ColorModel.green
    return ColorModel.red


def color_category(color: ColorModel) -> str:
    """Display category of a color label: "violet", "green" or "red"."""
    if "Violet" in color.value:
        return "violet"
    if color == ColorModel.green:
        return "green"
    return "red"


def predict(client_seed: str, server_seed: str, nonce: int) -> OutcomeModel:
    """Recompute the (number, color) a round produced from its seeds and nonce.

    Args:
        client_seed (str): Seed chosen by the player
        server_seed (str): Seed revealed by the game after the round
        nonce (int): Round counter, non-negative

    Returns:
        OutcomeModel: number in [0, 9] and its color
    """
    digest = seed_digest(combine_seeds(client_seed, server_seed, nonce))
    number = number_from_digest(digest)
    return OutcomeModel(number=number, color=color_for_number(number))
