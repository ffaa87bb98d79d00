"""Tests for re-export graph squashing."""

import logging

import pytest

from textstub.core import squash
from textstub.errors import MalformedTBDError, TBDError
from textstub.models import TextDylib


def test_squash_single_record() -> None:
    """Keep a lone record intact."""
    main = TextDylib(
        install_name='libA',
        exports=['_a'],
        weak_exports=['_w'],
    )

    assert squash([main]) == main


def test_squash_empty() -> None:
    """Refuse to squash nothing with a stub error."""
    with pytest.raises(MalformedTBDError, match='nothing to squash') as error:
        squash([])

    assert isinstance(error.value, TBDError)


def test_squash_depth_first_order() -> None:
    """Merge resolved libraries in depth-first preorder of first encounter."""
    result = squash([
        TextDylib(install_name='libA', exports=['_a'], reexported_libs=['libB', 'libD']),
        TextDylib(install_name='libD', exports=['_d'], weak_exports=['_dw']),
        TextDylib(install_name='libB', exports=['_b'], reexported_libs=['libC']),
        TextDylib(install_name='libC', exports=['_c'], weak_exports=['_cw']),
    ])

    assert result.install_name == 'libA'
    assert result.exports == ['_a', '_b', '_c', '_d']
    assert result.weak_exports == ['_cw', '_dw']
    assert result.reexported_libs == []


def test_squash_external_libraries() -> None:
    """Report libraries absent from the file as external."""
    result = squash([
        TextDylib(install_name='libA', reexported_libs=['libB']),
        TextDylib(install_name='libB', exports=['_b1'], reexported_libs=['libC']),
    ])

    assert result.exports == ['_b1']
    assert result.reexported_libs == ['libC']


def test_squash_external_order() -> None:
    """Keep external libraries in first-encountered order."""
    result = squash([
        TextDylib(install_name='libA', reexported_libs=['libX', 'libB', 'libZ']),
        TextDylib(install_name='libB', reexported_libs=['libY', 'libX']),
    ])

    assert result.reexported_libs == ['libX', 'libY', 'libZ']


def test_squash_repeated_edges() -> None:
    """Merge a library reached through several edges only once."""
    result = squash([
        TextDylib(install_name='libA', reexported_libs=['libB', 'libC', 'libB']),
        TextDylib(install_name='libB', exports=['_b'], reexported_libs=['libD']),
        TextDylib(install_name='libC', exports=['_c'], reexported_libs=['libB', 'libD']),
        TextDylib(install_name='libD', exports=['_d']),
    ])

    assert result.exports == ['_b', '_d', '_c']


def test_squash_cycles() -> None:
    """Terminate on cyclic re-export graphs."""
    result = squash([
        TextDylib(install_name='libA', exports=['_a'], reexported_libs=['libB']),
        TextDylib(install_name='libB', exports=['_b'], reexported_libs=['libA', 'libC']),
        TextDylib(install_name='libC', exports=['_c'], reexported_libs=['libB', 'libC']),
    ])

    assert result.exports == ['_a', '_b', '_c']
    assert result.reexported_libs == []


def test_squash_duplicate_install_names() -> None:
    """Let the last sibling with an install name win."""
    result = squash([
        TextDylib(install_name='libA', reexported_libs=['libB']),
        TextDylib(install_name='libB', exports=['_first']),
        TextDylib(install_name='libB', exports=['_last']),
    ])

    assert result.exports == ['_last']


def test_squash_unreferenced_siblings() -> None:
    """Ignore siblings nothing re-exports."""
    result = squash([
        TextDylib(install_name='libA', exports=['_a']),
        TextDylib(install_name='libB', exports=['_b']),
    ])

    assert result.exports == ['_a']


def test_squash_does_not_mutate_inputs() -> None:
    """Build a new record instead of extending the main one."""
    main = TextDylib(install_name='libA', exports=['_a'], reexported_libs=['libB'])

    squash([main, TextDylib(install_name='libB', exports=['_b'])])

    assert main.exports == ['_a']
    assert main.reexported_libs == ['libB']


def test_squash_logging(caplog: pytest.LogCaptureFixture) -> None:
    """Log resolved and external libraries."""
    caplog.set_level(logging.DEBUG, logger='textstub')

    squash([
        TextDylib(install_name='libA', reexported_libs=['libB', 'libC']),
        TextDylib(install_name='libB'),
    ])

    assert 'Merging re-exported library libB' in caplog.text
    assert 'Re-exported library libC is external' in caplog.text


def test_squash_long_chain() -> None:
    """Resolve re-export chains deeper than the interpreter stack."""
    depth = 2000
    records = [
        TextDylib(
            install_name=f'lib{position}',
            exports=[f'_sym{position}'],
            reexported_libs=[f'lib{position + 1}'],
        )
        for position in range(depth)
    ]

    result = squash(records)

    assert result.exports == [f'_sym{position}' for position in range(depth)]
    assert result.reexported_libs == [f'lib{depth}']


def test_squash_sibling_named_as_main() -> None:
    """Skip a sibling repeating the main library install name."""
    result = squash([
        TextDylib(install_name='libA', exports=['_a'], reexported_libs=['libB']),
        TextDylib(install_name='libB', exports=['_b'], reexported_libs=['libA']),
        TextDylib(install_name='libA', exports=['_shadow'], reexported_libs=['libC']),
    ])

    assert result.exports == ['_a', '_b']
    assert result.reexported_libs == []
