from .level_core import MemoryLevel
from tlb_hierarchy.operations import check_operation, WRITE

class MainMemoryLevel(MemoryLevel):
    """
    Backing store that receives write-backs of dirty TLB entries. Never fails.
    """
    def __init__(self, latency_ns=0, clock=None):
        super().__init__("Main Memory")
        self.latency_ns = latency_ns
        self.clock = clock
        self.reset()

    def reset(self):
        self.reads = 0
        self.writes = 0
        self.written_back = []

    def write_back(self, physical_address):
        """
        Commit the page at this physical address to main memory
        :param physical_address: int
        :return: None
        """
        self.written_back.append(physical_address)
        self.access(WRITE, physical_address, None)

    def access(self, operation, address, line):
        check_operation(operation)
        if operation == WRITE:
            self.writes += 1
        else:
            self.reads += 1
        if self.clock is not None:
            self.clock.increment(self.latency_ns)

    def get_stats(self):
        total = self.reads + self.writes
        return {
            "mem_accesses": total,
            "mem_reads": self.reads,
            "mem_writes": self.writes,
            "write_backs": len(self.written_back),
        }
