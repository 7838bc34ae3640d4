"""Information theory: Shannon entropy and its normalized form."""

import math
from collections.abc import Mapping
from typing import Union


class Entropy:
    """Information entropy calculations."""

    @staticmethod
    def shannon(distribution: Mapping[str, Union[int, float]], base: float = 2.0) -> float:
        """
        Compute Shannon entropy H(X) = -Σ p(x) log_b p(x).

        Args:
            distribution: Dictionary with event -> weight mapping
            base: Logarithm base; 2 gives bits, ``math.e`` gives nats

        Returns:
            Entropy in units of the chosen base
        """
        total = sum(distribution.values())
        if total == 0:
            return 0.0

        entropy = 0.0
        for count in distribution.values():
            p = count / total
            if p > 0:
                entropy -= p * math.log(p, base)

        return entropy

    @staticmethod
    def normalized(distribution: Mapping[str, Union[int, float]]) -> float:
        """
        Normalize entropy by maximum possible entropy.

        H_norm = H / ln(N) where N is number of events in the distribution,
        with H taken in nats. 1.0 means the weight is spread perfectly evenly.

        Returns:
            Normalized entropy in [0, 1]
        """
        n = len(distribution)
        if n <= 1:
            return 0.0
        return Entropy.shannon(distribution, base=math.e) / math.log(n)
