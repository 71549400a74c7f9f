class SimulatedClock:
    """
    Accumulates simulated latency in nanoseconds. Purely an accounting side effect.
    """
    def __init__(self):
        self.now_ns = 0

    def increment(self, nanoseconds):
        self.now_ns += nanoseconds
        return self.now_ns

    def reset(self):
        self.now_ns = 0
