#!/usr/bin/python
# -*- coding: utf-8 -*-
# vim:ts=2:sw=2:et:ai

import sys

import colorama

from . import context
from . import playerformat
from . import sources

from .args import parser
from .common import dbg, err, uniprint
from .values import Float, Integer, Text, TextList


class DefaultConfigurable(object):
  def __init__(self, args):
    self._args = args
    self._state = None

  @property
  def args(self):
    return self._args

  @property
  def state(self):
    if self._state is None:
      if self.args.state:
        self._state = sources.load_state(self.args.state)
      else:
        self._state = sources.PlayerState()
    return self._state

  def debug(self, text, depth=0):
    if self.args.debug:
      dbg(text, depth)

  def format(self, fmt, ctx):
    tokens = playerformat.tokenize(fmt, self.args.max_format_length)
    self.debug('tokens:')
    for token in tokens:
      self.debug(repr(token), 1)
    self.debug('context:')
    for key in sorted(ctx):
      self.debug('%s = %s' % (key, repr(ctx[key])), 1)
    return playerformat.render(tokens, ctx)


class StatusCommand(DefaultConfigurable):
  def run(self):
    status = self.state.status
    if self.args.format is not None:
      uniprint(self.format(
          self.args.format,
          context.status_context(status) if status is not None else {}))
    else:
      uniprint(status if status else 'Not available')
    return 0


class VolumeCommand(DefaultConfigurable):
  def run(self):
    level = self.state.volume
    if level is None:
      err('volume is not available')
      return 1
    if self.args.format is not None:
      uniprint(self.format(self.args.format, context.volume_context(level)))
    else:
      uniprint('%f' % level)
    return 0


class PositionCommand(DefaultConfigurable):
  def run(self):
    position = self.state.position
    if position is None:
      err('position is not available')
      return 1
    if self.args.format is not None:
      uniprint(self.format(
          self.args.format, context.position_context(position)))
    else:
      uniprint('%f' % (position / 1000000.0))
    return 0


class MetadataCommand(DefaultConfigurable):
  @property
  def metadata(self):
    if self.args.audio_file:
      return sources.file_metadata(self.args.audio_file)
    return self.state.metadata

  def run(self):
    metadata = self.metadata

    if not metadata:
      err('no metadata is available')
      return 1

    if self.args.format is not None:
      uniprint(self.format(
          self.args.format, context.metadata_context(metadata)))
      return 0

    for key in self.args.keys or [None]:
      data = context.print_metadata(metadata, key)
      if data is not None:
        uniprint(data)
    return 0


def parse_value(text):
  for kind in (int, float):
    try:
      return kind(text)
    except ValueError:
      pass
  return text


def parse_context(assignments):
  ctx = {}
  # Repeated names list the values as typed, not their parsed display form.
  typed = {}
  for assignment in assignments:
    name, sep, text = assignment.partition('=')
    name = name.strip()
    if not sep or not name:
      parser.error('expected NAME=VALUE, got %r' % assignment)
    typed.setdefault(name, []).append(text)
    if len(typed[name]) > 1:
      ctx[name] = TextList(typed[name])
    else:
      value = parse_value(text)
      if isinstance(value, int):
        try:
          ctx[name] = Integer(value)
        except ValueError:
          ctx[name] = Text(text)
      elif isinstance(value, float):
        ctx[name] = Float(value)
      else:
        ctx[name] = Text(value)
  return ctx


class RenderCommand(DefaultConfigurable):
  def run(self):
    uniprint(self.format(self.args.format, parse_context(self.args.values)))
    return 0


def provide_configured_command(args):
  if args.cmd == 'status':
    return StatusCommand(args)
  elif args.cmd == 'volume':
    return VolumeCommand(args)
  elif args.cmd == 'position':
    return PositionCommand(args)
  elif args.cmd == 'metadata':
    return MetadataCommand(args)
  elif args.cmd == 'render':
    return RenderCommand(args)
  else:
    parser.error("can't understand command '%s' -- this is a bug!" % (args.cmd))

def main(argv=None):
  colorama.just_fix_windows_console()
  args = parser.parse_args(argv)
  command = provide_configured_command(args)
  try:
    return command.run()
  except (playerformat.FormatError, sources.StateFileError) as e:
    err(str(e))
    return 1

if __name__ == '__main__':
  sys.exit(main())
