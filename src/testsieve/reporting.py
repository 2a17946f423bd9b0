"""
Reporting functionality: diagnostics about testsieve itself, not about the tests.
"""

import logging
import logging.config
import sys
import traceback

logging.config.dictConfig({
    'version'                  : 1,
    'disable_existing_loggers' : False,
    'formatters'               : {
        'standard' : {
            'format' : '%(name)s [%(levelname)s]: %(message)s'
        },
    },
    'handlers' : {
        'default' : {
            'level'     : 'DEBUG',
            'formatter' : 'standard',
            'class'     : 'logging.StreamHandler',
            'stream'    : 'ext://sys.stderr'
        }
    },
    'loggers' : {
        '' : { # root logger -- set level to most output that can happen
            'handlers'  : [ 'default' ],
            'level'     : 'WARNING',
            'propagate' : True
        }
    }
})
LOG = logging.getLogger( 'testsieve' )

def set_reporting_level(n_debug_flags: int) :
    if n_debug_flags == 1:
        LOG.setLevel(logging.INFO)
    elif n_debug_flags >= 2:
        LOG.setLevel(logging.DEBUG)


def trace(*args):
    """
    Emit a trace message.

    args: the message or message components
    """
    if LOG.isEnabledFor(logging.DEBUG):
        LOG.debug(_construct_msg(True, False, args))


def info(*args):
    """
    Emit an info message.

    args: msg: the message or message components
    """
    if LOG.isEnabledFor(logging.INFO):
        LOG.info(_construct_msg(False, False, args))


def warning(*args):
    """
    Emit a warning message.

    args: the message or message components
    """
    if LOG.isEnabledFor(logging.WARNING):
        LOG.warning(_construct_msg(False, LOG.isEnabledFor(logging.DEBUG), args))


def fatal(*args):
    """
    Emit a single fatal error line and exit with a non-zero status.

    args: the message or message components
    """
    if args:
        if LOG.isEnabledFor(logging.CRITICAL):
            LOG.critical(_construct_msg(False, LOG.isEnabledFor(logging.DEBUG), args))

    raise SystemExit(255) # Don't call exit() because that will close stdin


def _construct_msg(with_loc, with_tb, *args):
    """
    Construct a message from these arguments.

    with_loc: construct message with location info
    with_tb: construct message with traceback if an exception is the last argument
    args: the message or message components
    return: string message
    """
    if with_loc:
        frame  = sys._getframe(2) # pylint: disable=protected-access
        ret = f'{ frame.f_code.co_filename }#{ frame.f_lineno } { frame.f_code.co_name }: '
    else:
        ret = ''

    def m(a):
        if a is None:
            return '<undef>'
        if isinstance(a, OSError):
            return type(a).__name__ + ' ' + str(a)
        return a

    ret += ' '.join(map(str, map(m, *args)))

    if with_tb and len(*args) > 0:
        *_, last = iter(*args)
        if isinstance(last, Exception):
            ret += '\n' + ''.join(traceback.format_exception(type(last), last, last.__traceback__))

    return ret
