class QueryBus:
    def __init__(self):
        self.handlers = {}

    def register_handler(self, query_type, handler):
        self.handlers[query_type] = handler

    def handle(self, query):
        query_type = type(query)
        if query_type not in self.handlers:
            raise ValueError(f"No handler registered for query type: {query_type}")
        return self.handlers[query_type].handle(query)
