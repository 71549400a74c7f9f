from .level_core import MemoryLevel

class PageTableLevel(MemoryLevel):
    """
    Page table walker consulted on a full TLB miss. Frames reclaimed from other pages are announced on
    the invalidation bus so that cached translations for them go stale.
    """
    def __init__(self, page_table, invalidation_bus=None, latency_ns=0, clock=None):
        super().__init__("Page Table")
        self.page_table = page_table
        self.invalidation_bus = invalidation_bus
        self.latency_ns = latency_ns
        self.clock = clock

    def _manage_translation(self, address, operation):
        translation_info = self.page_table.translate(address, operation)
        if self.clock is not None:
            self.clock.increment(self.latency_ns)
        if translation_info.evicted_entry and self.invalidation_bus:
            self.invalidation_bus.publish_page_evicted(translation_info.evicted_entry)
        return translation_info

    def resolve(self, virtual_address, operation, line=None):
        """
        Walk the page table for a virtual address
        :param virtual_address: int
        :param operation: "R" or "W"
        :param line: optional AccessLine to record the page table hit or miss on
        :return: int physical address
        """
        return self.access(operation, virtual_address, line).physical_address

    def access(self, operation, address, line):
        translation_info = self._manage_translation(address, operation)
        if line is not None:
            line.page_table_result = translation_info.hit
        return translation_info

    def get_stats(self):
        return self.page_table.get_stats()
