from tokenledger.execution.runtime import rt


def emit(event, **data):
    rt.emit(event, data)
