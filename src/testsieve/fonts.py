"""
Glyph fonts for the big "NN% tests passed." display. Every entry of a font has the
same number of rows.
"""

import msgspec


class Font(msgspec.Struct, frozen=True):
    numerals: tuple[tuple[str, ...], ...]
    percent: tuple[str, ...]
    passed: tuple[str, ...]
    tests: tuple[str, ...]
    run: tuple[str, ...]
    space: str


    @property
    def height(self) -> int:
        return len(self.percent)


# Based on the 'smbraille' toilet font by Sam Hocevar <sam@hocevar.net>,
# with a % sign added and the numerals turned into text figures.
BRAILLE = Font(
    numerals=(
        (' ⡔⣢', ' ⠫⠜'),
        (' ⢴ ', ' ⠼⠄'),
        (' ⠔⢢', ' ⠮⠤'),
        (' ⠒⢲', ' ⣈⡱'),
        (' ⢀⢴', ' ⠉⢹'),
        (' ⡖⠒', ' ⣉⡱'),
        (' ⣎⡁', ' ⠣⠜'),
        (' ⠒⢲', ' ⢰⠁'),
        (' ⢎⡱', ' ⠣⠜'),
        (' ⡔⢢', ' ⢈⡹'),
    ),
    percent=(' ⠶⡜', ' ⡜⠶'),
    passed=(' ⣀⡀ ⢀⣀ ⢀⣀ ⢀⣀ ⢀⡀ ⢀⣸  ', ' ⡧⠜ ⠣⠼ ⠭⠕ ⠭⠕ ⠣⠭ ⠣⠼ ⠶'),
    tests=(' ⣰⡀ ⢀⡀ ⢀⣀ ⣰⡀ ⢀⣀', ' ⠘⠤ ⠣⠭ ⠭⠕ ⠘⠤ ⠭⠕'),
    run=(' ⡀⣀ ⡀⢀ ⣀⡀  ', ' ⠏  ⠣⠼ ⠇⠸ ⠶'),
    space='  ',
)

# Based on the 'future' toilet font by Sam Hocevar <sam@hocevar.net>
FUTURE = Font(
    numerals=(
        ('┏━┓', '┃┃┃', '┗━┛'),
        ('╺┓ ', ' ┃ ', '╺┻╸'),
        ('┏━┓', '┏━┛', '┗━╸'),
        ('┏━┓', '╺━┫', '┗━┛'),
        ('╻ ╻', '┗━┫', '  ╹'),
        ('┏━╸', '┗━┓', '┗━┛'),
        ('┏━┓', '┣━┓', '┗━┛'),
        ('┏━┓', '  ┃', '  ╹'),
        ('┏━┓', '┣━┫', '┗━┛'),
        ('┏━┓', '┗━┫', '┗━┛'),
    ),
    percent=('┏┓╻', '┏━┛', '╹┗┛'),
    passed=('┏━┓┏━┓┏━┓┏━┓┏━╸╺┳┓ ', '┣━┛┣━┫┗━┓┗━┓┣╸  ┃┃ ', '╹  ╹ ╹┗━┛┗━┛┗━╸╺┻┛╹'),
    tests=('╺┳╸┏━╸┏━┓╺┳╸┏━┓', ' ┃ ┣╸ ┗━┓ ┃ ┗━┓', ' ╹ ┗━╸┗━┛ ╹ ┗━┛'),
    run=('┏━┓╻ ╻┏┓╻ ', '┣┳┛┃ ┃┃┗┫ ', '╹┗╸┗━┛╹ ╹╹'),
    space='  ',
)

# Not really a font. Handy in tests.
BORING = Font(
    numerals=tuple( (str(i),) for i in range(10) ),
    percent=('%',),
    passed=('passed.',),
    tests=('tests',),
    run=('run.',),
    space=' ',
)

# Double-width characters
DOUBLE = Font(
    numerals=(('０',), ('１',), ('２',), ('３',), ('４',), ('５',), ('６',), ('７',), ('８',), ('９',)),
    percent=('％',),
    passed=('ｐａｓｓｅｄ．',),
    tests=('ｔｅｓｔｓ',),
    run=('ｒｕｎ．',),
    space='　',
)
