class Reducer:
    """Collective reductions over all subdomains taking part in a computation.

    Every participating subdomain must call the same reduction, in the same
    order; each call blocks until all participants have contributed and
    returns the reduced value to all of them.
    """

    def sum(self, value: float) -> float:
        raise NotImplementedError()

    def max(self, value: float) -> float:
        raise NotImplementedError()

    def min(self, value: float) -> float:
        raise NotImplementedError()


class LocalReducer(Reducer):
    """Reductions over a single participant, for serial runs"""

    def sum(self, value: float) -> float:
        return float(value)

    def max(self, value: float) -> float:
        return float(value)

    def min(self, value: float) -> float:
        return float(value)
