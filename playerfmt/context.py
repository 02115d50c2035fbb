#!/usr/bin/python
# -*- coding: utf-8 -*-
# vim:ts=2:sw=2:et:ai

from .values import Float, Integer, Text, print_value, valueize


# Short names that templates can use instead of the namespaced metadata keys.
metadata_aliases = {
    'artist': 'xesam:artist',
    'album': 'xesam:album',
    'title': 'xesam:title',
}


def metadata_context(metadata):
  context = {key: valueize(value) for key, value in metadata.items()}
  for alias, key in metadata_aliases.items():
    if alias not in context and key in context:
      context[alias] = context[key]
  return context


def status_context(status):
  return {'status': Text(status)}


def volume_context(level):
  return {'volume': Float(level)}


def position_context(position):
  return {'position': Integer(position)}


def print_metadata(metadata, key=None):
  """Prints metadata without a format string.

  With no key, every entry is printed on its own line, sorted by key. With a
  key, only that entry's display form is returned, or None if it's missing.
  """
  context = metadata_context(metadata)

  if key is None:
    if not metadata:
      return None
    width = max(len(k) for k in metadata)
    return '\n'.join(
        '%-*s %s' % (width, k, print_value(context[k]))
        for k in sorted(metadata))

  if key in context:
    return print_value(context[key])
  return None
