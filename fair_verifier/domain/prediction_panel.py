from typing import Optional

from fair_verifier.domain.outcome_rules import combine_seeds, predict, seed_digest
from fair_verifier.models.dc_models import OutcomeModel, PredictionModel


class PredictionPanel:
    """Input state of the prediction tool.

    The outcome is derived from the current inputs on every read, so a cleared
    seed never leaves a stale prediction behind.
    """

    def __init__(self, client_seed: str = "", server_seed: str = "", nonce: int = 0):
        self.client_seed = client_seed
        self.server_seed = server_seed
        self.nonce = max(0, nonce)

    def set_seeds(self, client_seed: str, server_seed: str) -> None:
        self.client_seed = client_seed
        self.server_seed = server_seed

    def increment_nonce(self) -> int:
        self.nonce += 1
        return self.nonce

    def decrement_nonce(self) -> int:
        self.nonce = max(0, self.nonce - 1)
        return self.nonce

    @property
    def is_ready(self) -> bool:
        return bool(self.client_seed) and bool(self.server_seed)

    @property
    def outcome(self) -> Optional[OutcomeModel]:
        if not self.is_ready:
            return None
        return predict(self.client_seed, self.server_seed, self.nonce)

    def to_prediction(self) -> PredictionModel:
        outcome = self.outcome
        if outcome is None:
            return PredictionModel(status="awaiting_input")
        combined_seed = combine_seeds(self.client_seed, self.server_seed, self.nonce)
        return PredictionModel(
            status="ready",
            number=outcome.number,
            color=outcome.color,
            combined_seed=combined_seed,
            digest=seed_digest(combined_seed),
        )
