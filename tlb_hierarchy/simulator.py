from trace_parser import TraceParser
from tlb_hierarchy.clock import SimulatedClock
from tlb_hierarchy.operations import READ, WRITE
from tlb_hierarchy.data_structures.mem_levels.main_mem_level import MainMemoryLevel
from tlb_hierarchy.data_structures.mem_levels.virtual_memory_level import PageTableLevel
from tlb_hierarchy.data_structures.mem_levels.tlb_level import TLBHierarchy
from tlb_hierarchy.data_structures.virtual_mem.page_table import PageTable
from tlb_hierarchy.data_structures.result_structures.access_results import AccessLine
from tlb_hierarchy.protocols.invalidation_bus import InvalidationBus

INVALIDATE = "I"

class TLBHierarchySimulator:
    """Simulates the TLB hierarchy in front of a page table based on the provided configuration."""
    def __init__(self, config):
        self.config = config
        self.bits = self.config.bits
        self.clock = SimulatedClock()
        self.memory = MainMemoryLevel(latency_ns=config.mem.latency_ns, clock=self.clock)
        invalidation_bus = InvalidationBus()
        self.pt = PageTableLevel(PageTable(config), invalidation_bus, latency_ns=config.pt.latency_ns,
                                 clock=self.clock)
        self.tlb = TLBHierarchy.from_config(config, self.pt, backing_store=self.memory, clock=self.clock,
                                            invalidation_bus=invalidation_bus)
        self.top_level = self.tlb

        self.reads = 0
        self.writes = 0
        self.invalidations = 0

    def reset(self):
        """
        Return every level, counter and the clock to the power-on state
        :return: None
        """
        self.tlb.init()
        self.pt.page_table.reset()
        self.memory.reset()
        self.clock.reset()
        self.reads = 0
        self.writes = 0
        self.invalidations = 0

    def step(self, operation, value):
        """
        Apply a single trace record
        :param operation: "R", "W" or "I"
        :param value: virtual address, or virtual page number for "I"
        :return: AccessLine for translations, None for invalidations
        """
        if operation == INVALIDATE:
            self.invalidations += 1
            self.tlb.invalidate(value)
            return None
        if operation == READ:
            self.reads += 1
        elif operation == WRITE:
            self.writes += 1
        else:
            raise ValueError(f"Unknown op: {operation}")
        # have line get passed through the hierarchy to collect info
        line = AccessLine(value, operation)
        self.top_level.access(operation, value, line)
        return line

    def simulate(self, trace, verbose=True):
        """
        Core simulator functionality, simulates the TLB hierarchy using the provided trace file.
        :param trace: trace file path
        :param verbose: print one line per access
        :return: None
        """
        self.reset()
        if verbose:
            print("Virtual  Op Virt.  Page L1   L2   PT   Phys.  Physical")
            print("Address     Page # Off  Res. Res. Res. Page # Address")
            print("-------- -- ------ ---- ---- ---- ---- ------ --------")
        for operation, value, hex_value in TraceParser(trace, addr_bits=self.config.address_bits):
            line = self.step(operation, value)
            if verbose:
                if line is None:
                    print(f"invalidate virtual page {value:x}")
                else:
                    print(line)
        print("\nSimulation statistics\n")
        self.pprint_stats()

    def get_stats(self):
        """
        Gathers and returns stats from all levels of the simulated hierarchy.
        :return: dict of stats
        """
        stats = dict()
        tlb_stats = self.tlb.get_stats()
        stats["l1"] = tlb_stats["l1"]
        stats["l2"] = tlb_stats["l2"]
        stats["page table"] = self.pt.get_stats()
        stats["reads"] = self.reads
        stats["writes"] = self.writes
        stats["invalidations"] = self.invalidations
        stats["read ratio"] = self.reads / (self.reads + self.writes) if (self.reads + self.writes) > 0 else 0
        stats["write backs"] = tlb_stats["write backs"]
        stats["silent_dirty_evictions"] = tlb_stats["silent_dirty_evictions"]
        stats["main memory"] = self.memory.get_stats()
        stats["time ns"] = self.clock.now_ns
        return stats

    def pprint_stats(self):
        """
        Pretty prints the stats from all levels of the simulated hierarchy.
        :return: None
        """
        stats = self.get_stats()
        stat_str = ""
        for name, key in (("L1 TLB", "l1"), ("L2 TLB", "l2")):
            level_stats = stats[key]
            stat_str += f"{name} hits        : " + str(level_stats['hits']) + "\n"
            stat_str += f"{name} misses      : " + str(level_stats['misses']) + "\n"
            stat_str += f"{name} hit rate    : " + f"{level_stats['hit rate']:.6f}" + "\n"
            stat_str += f"{name} invalidated : " + str(level_stats['invalidations']) + "\n\n"
        pt_stats = stats["page table"]
        stat_str += "pt hits            : " + str(pt_stats['hits']) + "\n"
        stat_str += "pt misses          : " + str(pt_stats['misses']) + "\n"
        stat_str += "pt hit rate        : " + f"{pt_stats['hit rate']:.6f}" + "\n\n"
        stat_str += "Total reads        : " + str(stats['reads']) + "\n"
        stat_str += "Total writes       : " + str(stats['writes']) + "\n"
        stat_str += "Ratio of reads     : " + f"{stats['read ratio']:.6f}" + "\n"
        stat_str += "Invalidations      : " + str(stats['invalidations']) + "\n\n"
        stat_str += "TLB write backs    : " + str(stats['write backs']) + "\n"
        stat_str += "Dirty entries lost : " + str(stats['silent_dirty_evictions']) + "\n"
        stat_str += "page table refs    : " + str(pt_stats['accesses']) + "\n"
        stat_str += "disk refs          : " + str(pt_stats['disk refs']) + "\n"
        stat_str += "Simulated time (ns): " + str(stats['time ns']) + "\n"
        print(stat_str)
