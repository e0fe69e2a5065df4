from dataclasses import dataclass

A = 16807
M = 0x7FFFFFFF  # 2^31-1
SEED_SALT = 0x0FCDD36

def pm_next(state: int) -> int:
    return (state * A) % M

def seed_state(seed: int) -> int:
    """
    Map any integer seed onto a valid Park–Miller state (1..M-1).
    One affine step scrambles small seeds so neighbouring seeds do not
    start with nearly identical draws.
    """
    s = (A * (seed & M) + SEED_SALT) % M
    return s or 1

@dataclass
class PMRandom:
    """
    Park–Miller minimal standard stream. Pure integer arithmetic, so a seed
    yields the same sequence on every platform and interpreter.
    """
    state: int

    @classmethod
    def from_seed(cls, seed: int) -> "PMRandom":
        return cls(seed_state(seed))

    def next32(self) -> int:
        self.state = pm_next(self.state)
        return self.state

    def value(self) -> float:
        # state is 1..M-1, so this is 0 <= v < 1
        return (self.next32() - 1) / (M - 1)

    def range(self, lo: int, hi: int) -> int:
        """Integer in [lo, hi). An empty range returns lo; a reversed one is swapped."""
        if hi == lo:
            return lo
        if hi < lo:
            lo, hi = hi, lo
        return lo + int(self.value() * (hi - lo))

    def uniform(self, lo: float, hi: float) -> float:
        # Always consumes one draw, even when lo == hi.
        return lo + (hi - lo) * self.value()
