#!/usr/bin/python
# -*- coding: utf-8 -*-
# vim:ts=2:sw=2:et:ai

import os
import pathlib

import chardet
import simplejson

from mutagen import File, MutagenError

from .values import INT64_MAX, INT64_MIN, Integer, Text, TextList, valueize


class StateFileError(Exception):
  pass


class PlayerState(object):
  __slots__ = 'status', 'volume', 'position', 'metadata'

  def __init__(self, status=None, volume=None, position=None, metadata=None):
    self.status = status
    self.volume = volume
    self.position = position
    self.metadata = metadata if metadata is not None else {}

  def __repr__(self):
    return 'PlayerState(status=%r, volume=%r, position=%r, metadata=%r)' % (
        self.status, self.volume, self.position, self.metadata)


def _decode(tbytes, filename):
  encoding = chardet.detect(tbytes)['encoding'] or 'utf-8'
  try:
    return tbytes.decode(encoding)
  except LookupError as e:
    raise StateFileError(
        '%s: unknown encoding %s' % (filename, encoding)) from e
  except UnicodeDecodeError as e:
    raise StateFileError(
        '%s: cannot decode as %s: %s' % (filename, encoding, e.reason)) from e


def _expect(obj, key, types, filename):
  value = obj.get(key)
  if value is not None and (
      isinstance(value, bool) or not isinstance(value, types)):
    raise StateFileError(
        '%s: "%s" has the wrong type (%s)' % (
            filename, key, type(value).__name__))
  return value


def load_state(filename):
  """Loads a player state snapshot from a JSON file.

  The file holds one object with any of the keys "status" (string), "volume"
  (number), "position" (integer microseconds) and "metadata" (object). The
  encoding is detected, since snapshots are often written by other tools.
  """
  try:
    with open(filename, 'rb') as state_file:
      tbytes = state_file.read()
  except OSError as e:
    raise StateFileError('%s: %s' % (filename, e.strerror)) from e

  try:
    document = simplejson.loads(_decode(tbytes, filename))
  except simplejson.JSONDecodeError as e:
    raise StateFileError('%s: invalid JSON: %s' % (filename, e)) from e

  if not isinstance(document, dict):
    raise StateFileError('%s: expected a JSON object' % filename)

  metadata = _expect(document, 'metadata', dict, filename) or {}
  volume = _expect(document, 'volume', (int, float), filename)
  position = _expect(document, 'position', int, filename)
  if position is not None and not INT64_MIN <= position <= INT64_MAX:
    raise StateFileError(
        '%s: "position" does not fit in a signed 64-bit integer' % filename)

  return PlayerState(
      status=_expect(document, 'status', str, filename),
      volume=float(volume) if volume is not None else None,
      position=position,
      metadata={key: valueize(value) for key, value in metadata.items()},
  )


# Easy tag names and the MPRIS metadata keys they map onto.
xesam_list_keys = {
    'artist': 'xesam:artist',
    'albumartist': 'xesam:albumArtist',
    'genre': 'xesam:genre',
    'composer': 'xesam:composer',
}

xesam_text_keys = {
    'album': 'xesam:album',
    'title': 'xesam:title',
    'date': 'xesam:contentCreated',
}

xesam_int_keys = {
    'tracknumber': 'xesam:trackNumber',
    'discnumber': 'xesam:discNumber',
}


def _leading_int(text):
  # Track numbers are often stored as "3/12".
  head = text.split('/')[0].strip()
  try:
    return int(head)
  except ValueError:
    return None


def file_metadata(filename):
  try:
    mutagen_file = File(filename, easy=True)
  except (MutagenError, OSError) as e:
    raise StateFileError('%s: %s' % (filename, e)) from e

  if mutagen_file is None:
    raise StateFileError('%s: not a supported audio file' % filename)

  metadata = {}

  for key in mutagen_file.keys():
    field = mutagen_file[key]
    if not isinstance(field, list):
      field = [field]
    field = [str(x) for x in field]
    if not field:
      continue

    lower_key = key.lower()
    if lower_key in xesam_list_keys:
      metadata[xesam_list_keys[lower_key]] = TextList(field)
    elif lower_key in xesam_text_keys:
      metadata[xesam_text_keys[lower_key]] = Text(field[0])
    elif lower_key in xesam_int_keys:
      number = _leading_int(field[0])
      if number is not None:
        metadata[xesam_int_keys[lower_key]] = Integer(number)
    elif len(field) == 1:
      metadata[key] = Text(field[0])
    else:
      metadata[key] = TextList(field)

  info = getattr(mutagen_file, 'info', None)
  if info is not None and getattr(info, 'length', None):
    metadata['mpris:length'] = Integer(int(info.length * 1000000))

  metadata['xesam:url'] = Text(
      pathlib.Path(os.path.abspath(filename)).as_uri())

  return metadata
