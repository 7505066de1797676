import pytest

from strata.output import Output
from strata.result import Result
from strata.targets.stub import Stub


class Write:
    def __init__(self):
        self.output = ''
    def __call__(self, out):
        self.output += out.decode('utf8')


@pytest.fixture
def write():
    return Write()


def test_output_cmd(write):
    output = Output(write=write, flush=lambda: None)
    output.cmd('dnf clean all')
    assert 'dnf clean all' + output.colors.reset in write.output

    write.output = ''
    output = Output(debug='visit', write=write, flush=lambda: None)
    output.cmd('dnf clean all')
    assert write.output == ''


def test_output_visit_debug(write):
    output = Output(debug='cmd', write=write, flush=lambda: None)
    output.start('Packages(gcc)')
    assert write.output == ''

    output = Output(debug='visit', write=write, flush=lambda: None)
    output.start('Packages(gcc)')
    assert 'START' in write.output
    assert 'Packages(gcc)' in write.output


def test_output_error_regardless_of_debug(write):
    output = Output(debug=False, write=write, flush=lambda: None)
    output.error('FAIL exit with 1 dnf')
    assert 'FAIL exit with 1 dnf' in write.output


def test_output_results(write):
    output = Output(write=write, flush=lambda: None)
    target = Stub()
    for status in ('cached', 'success', 'success', 'failure'):
        target.results.append(Result(target, 'action'))
        target.results[-1].status = status
    output.results(target)
    assert 'SUCCESS REPORT: ' + output.colors.reset + '2' in write.output
    assert 'CACHED REPORT: ' + output.colors.reset + '1' in write.output
    assert 'FAIL REPORT: ' + output.colors.reset + '1' in write.output
