
def hex_to_int(hex_string):
    try:
        return int(hex_string, 16)
    except ValueError:
        raise ValueError(f"Malformed hex value in trace: {hex_string!r}") from None

class TraceParser:
    """
    Parses a trace file and yields operation and value pairs.
    R and W lines carry a virtual address, I lines carry a virtual page number to invalidate.
    """
    def __init__(self, trace_file, addr_bits=32):
        self.addr_bits = addr_bits
        self.trace_file = trace_file
        with open(trace_file, 'r') as f:
            self.lines = f.readlines()
        self._mask = (1 << self.addr_bits) - 1

    def __iter__(self):
        # iterate over each line and yield relevant info
        for line in self.lines:
            parts = line.split(":")
            if len(parts) < 2:
                continue
            operation = parts[0].strip().upper()
            hex_string = parts[1].strip()
            value = hex_to_int(hex_string)
            if operation != "I":
                value &= self._mask
            yield operation, value, hex_string
