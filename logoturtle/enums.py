import enum


@enum.unique
class ErrorCategory(enum.Enum):
  structural = enum.auto()
  name = enum.auto()
  syntax = enum.auto()
  type = enum.auto()
  binding = enum.auto()


@enum.unique
class ErrorKind(enum.Enum):
  # Structural
  MissingLeftBracket = enum.auto()
  MissingRightBracket = enum.auto()
  MissingWhileOrIf = enum.auto()
  MissingTo = enum.auto()
  MissingEnd = enum.auto()
  DeclWrongPosition = enum.auto()
  RepeatFunctionName = enum.auto()
  # Lexical / name
  InvalidName = enum.auto()
  MissingName = enum.auto()
  # Expression syntax
  UnexpectedExpr = enum.auto()
  InvalidNumber = enum.auto()
  MissingOperand = enum.auto()
  UnexpectedExtraOperand = enum.auto()
  UnexpectedAssign = enum.auto()
  # Type
  UnexpectedBooleanType = enum.auto()
  UnexpectedNumberType = enum.auto()
  UnmatchedExprType = enum.auto()
  NonIntegerValueError = enum.auto()
  UnDefinedColor = enum.auto()
  DivideByZero = enum.auto()
  # Binding
  UnDefinedVariable = enum.auto()
  UnDefinedVariableValue = enum.auto()
  UnDefinedFunction = enum.auto()
  TooManyArguments = enum.auto()
  MissingArguments = enum.auto()

  @property
  def category(self) -> ErrorCategory:
    return _CATEGORIES[self]


_CATEGORIES = {}
for _kind in ErrorKind:
  if _kind.value <= ErrorKind.RepeatFunctionName.value:
    _CATEGORIES[_kind] = ErrorCategory.structural
  elif _kind.value <= ErrorKind.MissingName.value:
    _CATEGORIES[_kind] = ErrorCategory.name
  elif _kind.value <= ErrorKind.UnexpectedAssign.value:
    _CATEGORIES[_kind] = ErrorCategory.syntax
  elif _kind.value <= ErrorKind.DivideByZero.value:
    _CATEGORIES[_kind] = ErrorCategory.type
  else:
    _CATEGORIES[_kind] = ErrorCategory.binding
del _kind
