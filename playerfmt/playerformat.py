#!/usr/bin/python
# -*- coding: utf-8 -*-
# vim:ts=2:sw=2:et:ai

from types import MappingProxyType
from typing import Callable, List, Mapping, NamedTuple, Optional

from .values import Integer, Opaque, Value, print_value, valueize


PASSTHROUGH = 'passthrough'
VARIABLE = 'variable'
FUNCTION = 'function'


class Token(NamedTuple):
  kind: str
  text: str
  argument: Optional['Token'] = None

  def __repr__(self):
    if self.kind == FUNCTION and self.argument is not None:
      return '%s(%s(%s))' % (self.kind, self.text, self.argument.text)
    return '%s(%s)' % (self.kind, repr(self.text))


class FormatError(Exception):
  def __str__(self):
    return '[format error] ' + super(FormatError, self).__str__()


class FormatSyntaxError(FormatError):
  def __init__(self, position, message):
    super(FormatSyntaxError, self).__init__(
        '%s at position %d' % (message, position))
    self.position = position
    self.message = message


class UnknownFunctionError(FormatError):
  def __init__(self, name):
    super(UnknownFunctionError, self).__init__(
        'unknown template function: %s' % name)
    self.name = name


# Scanner states. Only _PASSTHROUGH is safe to stop in.
_PASSTHROUGH = 'passthrough'
_INSIDE = 'inside'
_PARAMS_OPEN = 'params open'
_PARAMS_CLOSED = 'params closed'


def _byte_offset(fmt, i):
  return len(fmt[:i].encode('utf-8', errors='surrogatepass'))


def _syntax_error(fmt, i, message):
  return FormatSyntaxError(_byte_offset(fmt, i), message)


def _flush(buf):
  text = ''.join(buf)
  buf.clear()
  return text


def tokenize(fmt: str, max_length: Optional[int] = None) -> List[Token]:
  if max_length is not None and len(fmt) > max_length:
    raise _syntax_error(
        fmt, max_length,
        'format string is longer than the limit of %d characters' % max_length)

  tokens = []
  buf = []
  state = _PASSTHROUGH
  opener = paren = 0
  length = len(fmt)
  i = 0

  while i < length:
    c = fmt[i]
    pair = c + fmt[i + 1] if i + 1 < length else c

    if pair == '{{':
      if state != _PASSTHROUGH:
        raise _syntax_error(fmt, i, 'unexpected "{{"')
      if buf:
        tokens.append(Token(PASSTHROUGH, _flush(buf)))
      state, opener = _INSIDE, i
      i += 2
      continue

    if state == _PASSTHROUGH:
      # Parens and closers mean nothing outside of a directive.
      buf.append(c)
      i += 1
      continue

    if pair == '}}':
      if state == _PARAMS_OPEN:
        raise _syntax_error(
            fmt, i, 'unmatched opener "(" (expected a closing ")")')
      elif state == _INSIDE:
        name = _flush(buf).strip()
        if not name:
          raise _syntax_error(fmt, i, 'empty template expression')
        tokens.append(Token(VARIABLE, name))
      else:
        trailing = _flush(buf)
        for k, each in enumerate(trailing):
          if not each.isspace():
            raise _syntax_error(
                fmt, i - len(trailing) + k,
                'unexpected input after closing parens')
      state = _PASSTHROUGH
      i += 2
      continue

    if c == '(':
      if state != _INSIDE:
        raise _syntax_error(fmt, i, 'unexpected "("')
      name = _flush(buf).strip()
      if not name:
        raise _syntax_error(fmt, i, 'expected a function name')
      tokens.append(Token(FUNCTION, name))
      state, paren = _PARAMS_OPEN, i
    elif c == ')':
      if state != _PARAMS_OPEN:
        raise _syntax_error(fmt, i, 'unexpected ")"')
      name = _flush(buf).strip()
      if not name:
        raise _syntax_error(fmt, i, 'expected a function parameter')
      fn_token = tokens[-1]
      assert fn_token.kind == FUNCTION and fn_token.argument is None
      tokens[-1] = fn_token._replace(argument=Token(VARIABLE, name))
      state = _PARAMS_CLOSED
    else:
      buf.append(c)
    i += 1

  if state in (_INSIDE, _PARAMS_CLOSED):
    raise _syntax_error(
        fmt, opener, 'unmatched opener "{{" (expected a matching "}}")')
  elif state == _PARAMS_OPEN:
    raise _syntax_error(
        fmt, paren, 'unmatched opener "(" (expected a matching ")")')

  if buf:
    tokens.append(Token(PASSTHROUGH, _flush(buf)))

  return tokens


def helper_lc(value):
  return print_value(value).lower()


def helper_uc(value):
  return print_value(value).upper()


def _cdiv(x, y):
  # Truncates toward zero rather than flooring.
  q = abs(x) // abs(y)
  return q if (x < 0) == (y < 0) else -q


def _cmod(x, y):
  return x - y * _cdiv(x, y)


def helper_duration(value):
  # Durations are int64 microseconds; anything else gets no output.
  if not isinstance(value, Integer):
    return None

  duration = value.value
  seconds = _cmod(_cdiv(duration, 1000000), 60)
  minutes = _cmod(_cdiv(duration, 60000000), 60)
  hours = _cdiv(duration, 3600000000)

  if hours != 0:
    return '%d:%02d:%02d' % (hours, minutes, seconds)
  return '%d:%02d' % (minutes, seconds)


helper_vtable = MappingProxyType({
    'lc': helper_lc,
    'uc': helper_uc,
    'duration': helper_duration,
})


def _lookup(context, name):
  try:
    found = context[name]
  except KeyError:
    return None
  found = valueize(found)
  # A null value (JSON null, D-Bus "nothing") counts as absent.
  if isinstance(found, Opaque) and found.value is None:
    return None
  return found


def render(
    tokens: List[Token],
    context: Mapping[str, Value],
    helpers: Optional[Mapping[str, Callable[[Value], Optional[str]]]] = None
    ) -> str:
  if helpers is None:
    helpers = helper_vtable

  output = []

  for token in tokens:
    if token.kind == PASSTHROUGH:
      output.append(token.text)
    elif token.kind == VARIABLE:
      value = _lookup(context, token.text)
      if value is not None:
        output.append(print_value(value))
    elif token.kind == FUNCTION:
      try:
        fn = helpers[token.text]
      except KeyError:
        raise UnknownFunctionError(token.text) from None
      value = _lookup(context, token.argument.text)
      if value is not None:
        result = fn(value)
        if result is not None:
          output.append(result)

  return ''.join(output)


def expand_format(fmt, context, helpers=None, max_length=None):
  return render(tokenize(fmt, max_length), context, helpers)


def compile(fmt, max_length=None):
  tokens = tokenize(fmt, max_length)
  return lambda context, helpers=None: render(tokens, context, helpers)
