"""Variables declared with 'let'. A VarTable lives for a whole session, so definitions persist across lines."""

from dataclasses import dataclass

from calculator.lang.error import UndefinedVariableError


@dataclass
class Variable:
    name: str
    value: float


class VarTable:
    """Insertion-ordered collection of uniquely named Variables."""

    def __init__(self):
        self._variables = {}  # dict of name: Variable

    def get(self, name):
        """Returns value of the variable called name. Raises UndefinedVariableError if it was never defined."""
        try:
            return self._variables[name].value
        except KeyError:
            raise UndefinedVariableError("undefined variable '{}'", name, diagnosis=False) from None

    def define(self, name, value):
        """Defines a new variable or updates an existing one in place. Returns value."""
        if name in self._variables:
            self._variables[name].value = value
        else:
            self._variables[name] = Variable(name, value)
        return value

    def __contains__(self, name):
        return name in self._variables

    def __len__(self):
        return len(self._variables)

    def __iter__(self):
        return iter(self._variables.values())

    def __repr__(self):
        return f"VarTable({list(self)})"
