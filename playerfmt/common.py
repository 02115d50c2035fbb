#!/usr/bin/python
# -*- coding: utf-8 -*-
# vim:ts=2:sw=2:et:ai

import os
import sys

import colorama


progname = 'playerfmt'

def dbg(message, depth=0):
  output = '[dbg] ' + ' ' * depth * 2 + message
  uniprint(output, stream=sys.stderr)

def err(message):
  output = progname + ': error: ' + message
  stream = sys.stderr
  if stream.isatty():
    output = colorama.Fore.RED + output + colorama.Style.RESET_ALL
  uniprint(output, stream=stream)

def uniprint(message, end=None, stream=None):
  if end is None:
    end = os.linesep
  if stream is None:
    stream = sys.stdout

  encoding = getattr(stream, 'encoding', None) or 'ascii'
  data = (message + end).encode(encoding, errors='replace')

  try:
    stream.buffer.write(data)
    stream.buffer.flush()
  except AttributeError:
    # Captured or wrapped streams only take text.
    stream.write(data.decode(encoding))
    stream.flush()
