class MLPError(Exception):
    pass

"""
Programmer errors: bad topology, running the network before its links exist,
sample vectors that don't match the layer sizes. Never retried.
"""
class ConfigurationError(MLPError):
    pass

class LinkNotFound(ConfigurationError, KeyError):
    origin: int
    dest: int

    def __init__(self, origin: int, dest: int):
        super().__init__(f"no link {origin}_to_{dest}; was create_weights() called?")
        self.origin = origin
        self.dest = dest

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return self.args[0]

"""
Non-finite error or weight during training, e.g. from exploding gradients.
"""
class NumericAnomaly(MLPError, ArithmeticError):
    pass
