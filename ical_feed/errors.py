class RetrievalError(Exception):
    def __init__(self, source, reason):
        super().__init__(f"Couldn't retrieve {source}: {reason}")
        self.source = source
        self.reason = reason

class UnsuccessfulResponse(RetrievalError):
    def __init__(self, source, r):
        super().__init__(source, f"HTTP {r.status_code}")
        self.r = r

