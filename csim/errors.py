class CsimError(Exception):
    pass


class InvalidGeometry(CsimError, ValueError):
    pass


class MalformedTraceLine(CsimError):
    def __init__(self, line, line_no=None):
        self.line = line
        self.line_no = line_no
        where = '' if line_no is None else ' (line {})'.format(line_no)
        super().__init__('Malformed trace line{}: {!r}'.format(where, line))


class UnknownAccessType(CsimError):
    def __init__(self, op_type):
        self.op_type = op_type
        super().__init__(
            'Not supported cache operation: {}!'.format(op_type))
