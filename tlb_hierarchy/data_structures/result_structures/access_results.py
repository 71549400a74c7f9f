class DirtyEviction:
    """
    Record of a valid dirty entry that left a TLB level without being written back
    """
    def __init__(self, level, site, vpn, ppn):
        self.level = level
        self.site = site
        self.vpn = vpn
        self.ppn = ppn

    def __eq__(self, other):
        if not isinstance(other, DirtyEviction):
            return NotImplemented
        return (self.level, self.site, self.vpn, self.ppn) == (other.level, other.site, other.vpn, other.ppn)

    def __repr__(self):
        return f"DirtyEviction(level={self.level!r}, site={self.site!r}, vpn={self.vpn:#x}, ppn={self.ppn:#x})"


class AccessResult:
    """
    Outcome of one translation through the TLB hierarchy
    """
    def __init__(self, operation, virtual_address, vpn, offset, ppn=None, physical_address=None,
                 l1_hit=None, l2_hit=None, page_table_walk=False):
        self.op = operation
        self.virtual_address = virtual_address
        self.vpn = vpn
        self.offset = offset
        self.ppn = ppn
        self.physical_address = physical_address
        self.l1_hit = l1_hit
        self.l2_hit = l2_hit
        self.page_table_walk = page_table_walk

    @property
    def level(self):
        if self.l1_hit:
            return "L1"
        if self.l2_hit:
            return "L2"
        return "PT"


class AccessLine:
    """
    Class to encapsulate all the info about a single memory access for logging purposes
    """
    def __init__(self, address, operation=None):
        self.address = int(address) & 0xFFFFFFFF
        self.operation = operation
        self.vpn = None
        self.page_offset = None
        self.l1_result = None
        self.l2_result = None
        self.page_table_result = None
        self.ppn = None
        self.physical_address = None

    def record(self, access_result):
        self.vpn = access_result.vpn
        self.page_offset = access_result.offset
        self.l1_result = access_result.l1_hit
        self.l2_result = access_result.l2_hit
        self.ppn = access_result.ppn
        self.physical_address = access_result.physical_address

    @staticmethod
    def _format_numeric(value, width, zero_pad=False):
        """
        Helper to format numeric values as hex strings, with options for width and zero-padding
        :param value: int or None
        :param width: int
        :param zero_pad: bool
        :return: formatted string
        """
        if value is None:
            return " " * width
        if zero_pad:
            return f"{value:0{width}x}"
        return f"{value:>{width}x}"

    @staticmethod
    def _format_hit_miss(value, width):
        """
        Helper to format hit/miss values as 'hit' or 'miss', or spaces if None
        :param value: bool or None
        :param width: int
        :return: formatted string
        """
        return (" " * width) if value is None else f"{'hit' if value else 'miss':>{width}s}"

    def __str__(self):
        # address is always printed as 8-hex, zero-padded
        addr = self._format_numeric(self.address, 8, zero_pad=True)
        op = f"{self.operation or '':>2s}"
        vpn = self._format_numeric(self.vpn, 6)
        page_off = self._format_numeric(self.page_offset, 4)
        l1_res = self._format_hit_miss(self.l1_result, 4)
        l2_res = self._format_hit_miss(self.l2_result, 4)
        pt_res = self._format_hit_miss(self.page_table_result, 4)
        ppn = self._format_numeric(self.ppn, 6)
        phys = self._format_numeric(self.physical_address, 8, zero_pad=self.physical_address is not None)

        return " ".join([addr, op, vpn, page_off, l1_res, l2_res, pt_res, ppn, phys])
