import math

def is_power_of_two(n):
    """Check if a number is a power of two. uses bit operations."""
    return n > 0 and (n & (n - 1)) == 0

def safe_log_2(n):
    """Compute the base-2 logarithm of a number, ensuring the number is a power of two."""
    if not is_power_of_two(n):
        raise ValueError("Input must be a power of two.")
    return int(math.log2(n))

def safe_enabled(enabled):
    """Ensure that the enabled flag is y or n and then make it a boolean."""
    enabled = enabled.strip().lower()
    if enabled not in {'y', 'n'}:
        raise ValueError("Enabled flag must be 'y' or 'n'.")
    return enabled == 'y'


class BitCounts:
    def __init__(self):
        # initialize them all to zero to start
        self.vpn_bits = 0
        self.page_offset_bits = 0
        self.ppn_bits = 0

class TLBConfig:
    def __init__(self, num_entries, latency_ns):
        self.num_entries = num_entries
        self.latency_ns = latency_ns

class PageTableConfig:
    def __init__(self, n_virtual_pages, n_physical_pages, page_size, latency_ns=0):
        self.n_virtual_pages = n_virtual_pages
        self.n_physical_pages = n_physical_pages
        self.page_size = page_size
        self.latency_ns = latency_ns

class MainMemoryConfig:
    def __init__(self, latency_ns=0):
        self.latency_ns = latency_ns

class Config:
    def __init__(self,
                 l1_cfg,
                 l2_cfg,
                 pt_cfg,
                 mem_cfg=None,
                 strict_write_back=False):
        self.l1 = l1_cfg
        self.l2 = l2_cfg
        self.pt = pt_cfg
        self.mem = mem_cfg if mem_cfg is not None else MainMemoryConfig()
        self.strict_write_back = strict_write_back
        self.address_bits = 0
        self.bits = BitCounts()
        self.validate()
        self.derive_bits()

    @property
    def page_bits(self):
        return self.bits.page_offset_bits

    @property
    def page_mask(self):
        return (1 << self.bits.page_offset_bits) - 1

    @classmethod
    def from_config_file(cls, filepath):
        # parse out config info
        with open(filepath) as infile:
            raw_lines = [ln.rstrip("\n") for ln in infile]

        # Section names exactly as in the file
        section_headers = {
            "L1 TLB configuration": "l1",
            "L2 TLB configuration": "l2",
            "Page Table configuration": "pt",
            "Main Memory configuration": "mem",
        }

        # Buckets for per-section key/values
        sections = {
            "l1": {},
            "l2": {},
            "pt": {},
            "mem": {},
            "toggles": {},  # for bottom y/n switches
        }

        current = None
        for ln in raw_lines:
            line = ln.strip()
            if not line:
                continue

            # Enter a new section?
            if line in section_headers:
                current = section_headers[line]
                continue

            # Bottom toggles (appear after sections)
            if line.lower().startswith("strict write-back:"):
                key, val = line.split(":", 1)
                sections["toggles"][key.strip()] = val.strip()
                continue

            # Regular "Key: value" inside a section
            if ":" in line and current is not None:
                key, val = line.split(":", 1)
                sections[current][key.strip()] = val.strip()
                continue

        # TLB config info
        l1_entries = int(sections["l1"].get("Number of entries", 16))
        l1_latency = int(sections["l1"].get("Latency (ns)", 1))
        l2_entries = int(sections["l2"].get("Number of entries", 64))
        l2_latency = int(sections["l2"].get("Latency (ns)", 5))

        # Page table config info
        n_virtual_pages = int(sections["pt"].get("Number of virtual pages", 0))
        n_physical_pages = int(sections["pt"].get("Number of physical pages", 0))
        page_size = int(sections["pt"].get("Page size", 0))
        pt_latency = int(sections["pt"].get("Latency (ns)", 0))

        mem_latency = int(sections["mem"].get("Latency (ns)", 0))

        strict_write_back = safe_enabled(sections["toggles"].get("Strict write-back", "n"))

        return cls(
            l1_cfg=TLBConfig(l1_entries, l1_latency),
            l2_cfg=TLBConfig(l2_entries, l2_latency),
            pt_cfg=PageTableConfig(n_virtual_pages, n_physical_pages, page_size, pt_latency),
            mem_cfg=MainMemoryConfig(mem_latency),
            strict_write_back=strict_write_back,
        )

    @staticmethod
    def _validate_tlb(name, tlb_cfg):
        if tlb_cfg.num_entries < 1:
            raise ValueError(f"{name} number of entries must be at least 1.")
        if tlb_cfg.latency_ns < 0:
            raise ValueError(f"{name} latency must not be negative.")

    def _validate_pt(self):
        # max number of virtual pages is 2^20
        if self.pt.n_virtual_pages < 1 or self.pt.n_virtual_pages > 2**20:
            raise ValueError("Number of virtual pages must be between 1 and 1048576.")
        if self.pt.n_physical_pages < 1 or self.pt.n_physical_pages > 2**20:
            raise ValueError("Number of physical pages must be between 1 and 1048576.")
        # page counts and page size must be powers of two
        if not is_power_of_two(self.pt.n_virtual_pages):
            raise ValueError("Number of virtual pages must be a power of two.")
        if not is_power_of_two(self.pt.n_physical_pages):
            raise ValueError("Number of physical pages must be a power of two.")
        if not is_power_of_two(self.pt.page_size):
            raise ValueError("Page size must be a power of two.")
        # max reference address length is 32 bits
        if (self.pt.n_virtual_pages * self.pt.page_size) > 2**32:
            raise ValueError("Maximum virtual address space exceeded (2^32).")
        if self.pt.latency_ns < 0:
            raise ValueError("Page table latency must not be negative.")

    def validate(self):
        # L1 size <= L2 size is assumed, not enforced
        self._validate_tlb("L1 TLB", self.l1)
        self._validate_tlb("L2 TLB", self.l2)
        self._validate_pt()
        if self.mem.latency_ns < 0:
            raise ValueError("Main memory latency must not be negative.")

    def derive_bits(self):
        self.bits.page_offset_bits = safe_log_2(self.pt.page_size)
        self.bits.vpn_bits = safe_log_2(self.pt.n_virtual_pages)
        self.bits.ppn_bits = safe_log_2(self.pt.n_physical_pages)
        self.address_bits = self.bits.vpn_bits + self.bits.page_offset_bits

    def __str__(self):
        print_str = ""
        print_str += f"L1 TLB contains {self.l1.num_entries} entries.\n"
        print_str += f"L1 TLB latency is {self.l1.latency_ns} ns.\n\n"
        print_str += f"L2 TLB contains {self.l2.num_entries} entries.\n"
        print_str += f"L2 TLB latency is {self.l2.latency_ns} ns.\n\n"
        print_str += f"Number of virtual pages is {self.pt.n_virtual_pages}.\n"
        print_str += f"Number of physical pages is {self.pt.n_physical_pages}.\n"
        print_str += f"Each page contains {self.pt.page_size} bytes.\n"
        print_str += f"Number of bits used for the page table index is {self.bits.vpn_bits}.\n"
        print_str += f"Number of bits used for the page offset is {self.bits.page_offset_bits}.\n"
        print_str += f"Page table latency is {self.pt.latency_ns} ns.\n\n"
        print_str += f"Main memory latency is {self.mem.latency_ns} ns.\n"
        if self.strict_write_back:
            print_str += "Dirty TLB entries are always written back on eviction."
        else:
            print_str += "Dirty L1 TLB entries are dropped without write-back on eviction."
        print_str += "\n"
        return print_str
