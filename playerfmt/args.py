#!/usr/bin/python
# -*- coding: utf-8 -*-
# vim:ts=2:sw=2:et:ai

import argparse

from .common import progname

desc = '''
Prints player status, volume, position and track metadata, optionally through
a format string such as "{{artist}} - {{title}} ({{duration(mpris:length)}})".
'''

epilog = '''
format strings:
  {{name}}        the value of a property or metadata key
  {{fn(name)}}    the value passed through a helper: lc, uc or duration
'''


def positive_int(text):
  try:
    value = int(text)
  except ValueError:
    raise argparse.ArgumentTypeError('invalid int value: %r' % text)
  if value <= 0:
    raise argparse.ArgumentTypeError('must be greater than zero: %r' % text)
  return value


parser = argparse.ArgumentParser(
    prog=progname,
    description=desc,
    epilog=epilog,
    formatter_class=argparse.RawDescriptionHelpFormatter,
)

cmd_parser = parser.add_subparsers(title='supported operations', dest='cmd')
cmd_parser.required = True

format_parser = argparse.ArgumentParser(add_help=False)

format_parser.add_argument('-f', '--format',
    default=None,
    dest='format',
    help='format string used to print the output',
    metavar='FORMAT',
)

status_cmd_parser = cmd_parser.add_parser('status',
    help='print the playback status',
    parents=[format_parser],
)

volume_cmd_parser = cmd_parser.add_parser('volume',
    help='print the volume level, from 0.0 to 1.0',
    parents=[format_parser],
)

position_cmd_parser = cmd_parser.add_parser('position',
    help='print the playback position in seconds',
    parents=[format_parser],
)

metadata_cmd_parser = cmd_parser.add_parser('metadata',
    help='print the metadata of the current track',
    parents=[format_parser],
)

metadata_cmd_parser.add_argument('--file',
    default=None,
    dest='audio_file',
    help='read metadata from the tags of an audio file instead of the state',
    metavar='FILE',
)

metadata_cmd_parser.add_argument('keys',
    nargs='*',
    help='print only these metadata keys',
    metavar='KEY',
)

render_cmd_parser = cmd_parser.add_parser('render',
    help='render a format string against values given on the command line',
)

render_cmd_parser.add_argument('format',
    help='format string to render',
    metavar='FORMAT',
)

render_cmd_parser.add_argument('values',
    nargs='*',
    help='context values; repeat a name to build a list',
    metavar='NAME=VALUE',
)


parser.add_argument('--state',
    default=None,
    help='JSON file holding a snapshot of the player state',
    metavar='FILE',
)

parser.add_argument('--max-format-length',
    default=None,
    dest='max_format_length',
    help='reject format strings longer than this many characters',
    type=positive_int,
    metavar='INT',
)

parser.add_argument('--debug',
    action='store_true',
    dest='debug',
    help='print the parsed format string and its context',
)
parser.set_defaults(debug=False)
