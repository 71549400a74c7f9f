

class InvalidationBus:
    """
    A simple invalidation bus to notify listeners about page evictions
    """
    def __init__(self):
        self.listeners = []

    def __str__(self):
        print_str = "Invalidation Bus Listeners:\n"
        for listener in self.listeners:
            print_str += f" - {listener.name}\n"
        return print_str

    def register_listener(self, listener):
        """
        Register a listener to the invalidation bus
        :param listener: memory level
        :return: None
        """
        if listener not in self.listeners:
            self.listeners.append(listener)

    def unregister_listener(self, listener):
        if listener in self.listeners:
            self.listeners.remove(listener)

    def publish_page_evicted(self, evicted_entry):
        """
        Handles each listener's on_page_evicted method if it exists
        :param evicted_entry: EvictedPageTableEntry
        :return: None
        """
        for listener in self.listeners:
            on_page_evicted = getattr(listener, "on_page_evicted", None)
            if on_page_evicted:
                on_page_evicted(evicted_entry)
