import io
import os

import pytest

import extendbed
from extendbed.extendbed import main

data_path = os.path.join(os.path.dirname(extendbed.__file__), 'resources')
sizes = os.path.join(data_path, 'sample.chrom.sizes')
inbed = os.path.join(data_path, 'sample.bed')


def _stdin(content):
    return io.TextIOWrapper(io.BytesIO(content), encoding='utf-8')


def test_extendbed_stranded(capsys):
    main(['-g', sizes, '-l', '10', '-r', '5', '--stranded', inbed])

    out = capsys.readouterr().out
    assert out == ('#track name=sample\n'
                   'chr1\t90\t205\tfeatureA\t0\t+\n'
                   'chr1\t95\t210\tfeatureB\t0\t-\n'
                   'chr2\t0\t15\tfeatureC\t0\t+\n'
                   'chrX\t35\t50\tfeatureD\t0\t-\n')


def test_extendbed_fromend(capsys):
    main(['-g', sizes, '--left', '10', '--right', '5', '--stranded',
          '--fromend', inbed])

    out = capsys.readouterr().out.splitlines()
    assert out[1:] == ['chr1\t190\t205\tfeatureA\t0\t+',
                       'chr1\t95\t110\tfeatureB\t0\t-',
                       'chr2\t0\t15\tfeatureC\t0\t+',
                       'chrX\t35\t50\tfeatureD\t0\t-']


def test_extendbed_multiple_files(capsys, tmpdir):
    other = tmpdir.join('other.bed')
    other.write('chrM\t0\t16\n')
    main(['-g', sizes, '-l', '1', '-r', '1', other.strpath, other.strpath])

    assert capsys.readouterr().out == 'chrM\t0\t16\nchrM\t0\t16\n'


def test_extendbed_stdin(capsys, monkeypatch):
    monkeypatch.setattr('sys.stdin', _stdin(b'chr1\t100\t200\n'))
    main(['-g', sizes, '-l', '10', '-r', '5'])
    assert capsys.readouterr().out == 'chr1\t90\t205\n'

    monkeypatch.setattr('sys.stdin', _stdin(b'chr1\t100\t200\n'))
    main(['-g', sizes, '-'])
    assert capsys.readouterr().out == 'chr1\t100\t200\n'


def test_extendbed_genome_from_cache(capsys, monkeypatch, tmpdir):
    tmpdir.join('hgtest.chrom.sizes').write('chr1\t150\n')
    monkeypatch.setenv('EXTENDBED_CACHE', tmpdir.strpath)
    monkeypatch.setattr('sys.stdin', _stdin(b'chr1\t100\t140\n'))

    main(['--genome', 'hgtest', '-r', '50'])
    assert capsys.readouterr().out == 'chr1\t100\t150\n'


def test_extendbed_malformed_record(capsys, caplog, tmpdir):
    bed = tmpdir.join('short.bed')
    bed.write('chr1\t100\t200\nchr1\t300\n')

    with pytest.raises(SystemExit) as excinfo:
        main(['-g', sizes, bed.strpath])

    assert excinfo.value.code == 1
    assert capsys.readouterr().out == 'chr1\t100\t200\n'
    assert 'line 2 of "{}"'.format(bed.strpath) in caplog.text


def test_extendbed_unknown_chromosome(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['-g', sizes, os.path.join(data_path, 'unknown_chrom.bed')])

    assert excinfo.value.code == 1
    assert capsys.readouterr().out == 'chr1\t100\t200\n'


@pytest.mark.parametrize('args', [
    ['--fromstart', '--fromend'],
    [],
    ['-g', os.path.join(data_path, 'missing.chrom.sizes')],
    ['-g', sizes, os.path.join(data_path, 'missing.bed')],
])
def test_extendbed_configuration_errors(capsys, args):
    if args and args[0] == '--fromstart':
        args = args + ['-g', sizes, inbed]

    with pytest.raises(SystemExit) as excinfo:
        main(args)

    assert excinfo.value.code == 1
    assert capsys.readouterr().out == ''


def test_extendbed_invalid_slop():
    with pytest.raises(SystemExit) as excinfo:
        main(['-g', sizes, '-l', 'ten', inbed])
    assert excinfo.value.code == 2


def test_extendbed_keeps_non_utf8_columns(capsysbinary, tmpdir):
    bed = tmpdir.join('latin1.bed')
    bed.write_binary(b'chr1\t100\t200\tg\xe9ne\n')

    main(['-g', sizes, '-l', '10', bed.strpath])
    assert capsysbinary.readouterr().out == b'chr1\t90\t200\tg\xe9ne\n'


def test_extendbed_keeps_comment_line_endings(capsysbinary, tmpdir):
    bed = tmpdir.join('crlf.bed')
    bed.write_binary(b'#hdr\r\nchr1\t1\t2\r\n')

    main(['-g', sizes, bed.strpath])
    assert capsysbinary.readouterr().out == b'#hdr\r\nchr1\t1\t2\n'


def test_extendbed_stdin_bytes(capsysbinary, monkeypatch):
    monkeypatch.setattr('sys.stdin', _stdin(b'#c\xff\r\nchr1\t1\t2\tx\xff\n'))

    main(['-g', sizes])
    assert capsysbinary.readouterr().out == b'#c\xff\r\nchr1\t1\t2\tx\xff\n'
