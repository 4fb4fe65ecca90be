from tokenledger.execution.runtime import rt
from contextlib import ContextDecorator
from functools import wraps


class __export(ContextDecorator):
    def __init__(self, contract):
        self.contract = contract

    def __enter__(self, *args, **kwargs):
        current_state = rt.context._get_state()

        state = {
            'caller': current_state['this'],
            'signer': current_state['signer'],
            'this': self.contract
        }

        rt.context._add_state(state)

    def __exit__(self, *args, **kwargs):
        rt.context._pop_state()


def export(func):
    # Contract methods know their own name only at call time, so the frame is pushed per call
    @wraps(func)
    def exported(self, *args, **kwargs):
        with __export(self.this):
            return func(self, *args, **kwargs)

    exported.__exported__ = True
    return exported


ctx = rt.context
