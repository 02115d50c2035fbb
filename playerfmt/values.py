#!/usr/bin/python
# -*- coding: utf-8 -*-
# vim:ts=2:sw=2:et:ai

"""Typed values that make up a formatting context.

Every context entry is one of the Value subclasses below. They correspond to
the handful of types a media player reports: strings, string lists (artists,
genres), 64-bit integers (track numbers, microsecond durations), doubles
(volume) and anything else, which is carried along as an opaque object.
"""

from typing import Any, Iterable


INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


class Value(object):
  __slots__ = 'value',

  def __init__(self, value):
    object.__setattr__(self, 'value', value)

  def __setattr__(self, name, value):
    raise AttributeError('%s is immutable' % type(self).__name__)

  def __delattr__(self, name):
    raise AttributeError('%s is immutable' % type(self).__name__)

  def __eq__(self, other):
    return (self.value == other.value
            if type(other) is type(self) else NotImplemented)

  def __ne__(self, other):
    return (self.value != other.value
            if type(other) is type(self) else NotImplemented)

  def __hash__(self):
    return hash((type(self).__name__, self.value))

  def __str__(self):
    return print_value(self)

  def __repr__(self):
    return '%s(%s)' % (type(self).__name__.lower(), repr(self.value))


class Text(Value):
  __slots__ = ()

  def __init__(self, value: str):
    if not isinstance(value, str):
      raise TypeError('Text requires a str, got %s' % type(value).__name__)
    super(Text, self).__init__(value)


class TextList(Value):
  __slots__ = ()

  def __init__(self, value: Iterable[str]):
    items = tuple(value)
    for each in items:
      if not isinstance(each, str):
        raise TypeError(
            'TextList items must be str, got %s' % type(each).__name__)
    super(TextList, self).__init__(items)


class Integer(Value):
  __slots__ = ()

  def __init__(self, value: int):
    if isinstance(value, bool) or not isinstance(value, int):
      raise TypeError('Integer requires an int, got %s' % type(value).__name__)
    if not INT64_MIN <= value <= INT64_MAX:
      raise ValueError('%d does not fit in a signed 64-bit integer' % value)
    super(Integer, self).__init__(value)


class Float(Value):
  __slots__ = ()

  def __init__(self, value: float):
    super(Float, self).__init__(float(value))


class Opaque(Value):
  __slots__ = ()

  def __hash__(self):
    try:
      return hash(('Opaque', self.value))
    except TypeError:
      return id(self)


def valueize(obj: Any) -> Value:
  if isinstance(obj, Value):
    return obj
  elif isinstance(obj, bool):
    return Opaque(obj)
  elif isinstance(obj, str):
    return Text(obj)
  elif isinstance(obj, int):
    if INT64_MIN <= obj <= INT64_MAX:
      return Integer(obj)
    return Opaque(obj)
  elif isinstance(obj, float):
    return Float(obj)
  elif isinstance(obj, (list, tuple)) and all(isinstance(x, str) for x in obj):
    return TextList(obj)
  return Opaque(obj)


def _print_opaque(obj):
  if obj is True:
    return 'true'
  elif obj is False:
    return 'false'
  elif obj is None:
    return 'nothing'
  elif isinstance(obj, (list, tuple)):
    return '[' + ', '.join(_print_opaque(x) for x in obj) + ']'
  elif isinstance(obj, dict):
    return '{' + ', '.join(
        '%s: %s' % (_print_opaque(k), _print_opaque(v))
        for k, v in obj.items()) + '}'
  elif isinstance(obj, Value):
    return _print_opaque(obj.value)
  return repr(obj)


def print_value(value: Value) -> str:
  """Returns the display form of a value.

  String lists are joined with ", ", strings print as themselves and numbers
  print in decimal. Everything else gets a structural representation, which is
  also what the case-folding helpers operate on.
  """
  if isinstance(value, TextList):
    return ', '.join(value.value)
  elif isinstance(value, Text):
    return value.value
  elif isinstance(value, Integer):
    return str(value.value)
  elif isinstance(value, Float):
    return repr(value.value)
  return _print_opaque(value.value)
