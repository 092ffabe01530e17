import pytest

from mcinfer.bn import BeliefNetwork
from mcinfer.errors import EvidenceError, EvidenceConsistencyError, ConfigurationError, \
    SamplingError, NoSuchNodeError
from mcinfer.inference import Sampler, ForwardSampling, LikelihoodWeighting, WeightedSample
from mcinfer.logic import WorldVariables


# Rain -> WetGrass, domains (True, False)
bn = BeliefNetwork()
rain = bn.add_node('Rain')
wet = bn.add_node('WetGrass')
bn.set_cpt(rain, [], [.2, .8])
bn.set_cpt(wet, [rain], [[.9, .1],
                         [.1, .9]])

P_WET = .2 * .9 + .8 * .1
P_RAIN_GIVEN_WET = .2 * .9 / P_WET

# Cause is always true, so Effect can never be sampled given Cause
degenerate = BeliefNetwork()
cause = degenerate.add_node('Cause')
effect = degenerate.add_node('Effect', ('e1', 'e2', 'e3'))
degenerate.set_cpt(cause, [], [1., 0.])
degenerate.set_cpt(effect, [cause], [[0., .5],
                                     [0., .5],
                                     [0., 0.]])


def test_network():
    assert bn.check_cpts() == []
    assert degenerate.check_cpts() == ['Effect']
    assert [n.name for n in bn.topological_order()] == ['Rain', 'WetGrass']
    assert bn.children(rain) == [wet]
    assert wet.cpf.get_double([1, 0]) == .1
    assert wet.cpf.get_double(3) == .9
    with pytest.raises(IndexError):
        wet.cpf.addr2realaddr([2, 0])
    with pytest.raises(NoSuchNodeError):
        bn['Sprinkler']


def test_sample_forward():
    sampler = Sampler(bn, ForwardSampling(), rndseed=0)
    assert sampler.get_cpt_probability(wet, [0, 1]) == .1
    assert sampler.get_cpt_probability(wet, [1, 1]) == .9
    counts = [0, 0]
    for _ in range(5000):
        counts[sampler.sample_forward(wet, [0, -1])] += 1
    assert abs(counts[0] / 5000. - .9) < .03


def test_sample_forward_zero_column():
    sampler = Sampler(degenerate, ForwardSampling(), rndseed=0)
    assert sampler.sample_forward(effect, [0, -1]) == -1
    assert sampler.sample_forward(effect, [1, -1]) in (0, 1)


def test_forward_sampling():
    sampler = Sampler(bn, ForwardSampling(), rndseed=1, numsamples=5000)
    dist = sampler.infer()
    assert dist.numsamples == 5000
    assert abs(dist.probability(1, 0) - P_WET) < .03
    assert abs(dist.probability(0, 0) - .2) < .03
    assert sampler.samplingtime >= 0


def test_forward_sampling_evidence():
    sampler = Sampler(bn, ForwardSampling(), rndseed=2, numsamples=3000)
    sampler.set_evidence([-1, 0])
    dist = sampler.infer()
    assert dist.probability(1, 0) == 1.
    assert abs(dist.probability(0, 0) - P_RAIN_GIVEN_WET) < .04


def test_likelihood_weighting():
    sampler = Sampler(bn, LikelihoodWeighting(), rndseed=3, numsamples=5000)
    sampler.set_evidence([-1, 0])
    dist = sampler.infer()
    assert dist.numsamples == 5000
    assert abs(dist.probability(1, 0) - 1.) < 1e-9
    assert abs(dist.probability(0, 0) - P_RAIN_GIVEN_WET) < .05


def test_determinism():
    def run(seed):
        sampler = Sampler(bn, LikelihoodWeighting(), rndseed=seed, numsamples=500)
        sampler.set_evidence([-1, 1])
        return sampler.infer().results()
    assert run(4) == run(4)


def test_failed_steps():
    sampler = Sampler(degenerate, ForwardSampling(), maxtrials=3, numsamples=5)
    with pytest.raises(SamplingError):
        sampler.infer()
    sampler = Sampler(degenerate, ForwardSampling(), maxtrials=3, numsamples=5, skipfailedsteps=True)
    dist = sampler.infer()
    assert dist.numsamples == 0
    assert dist.Z == 0
    # evidence that the network cannot produce
    bn_impossible = BeliefNetwork()
    n = bn_impossible.add_node('N')
    bn_impossible.set_cpt(n, [], [1., 0.])
    sampler = Sampler(bn_impossible, ForwardSampling(), maxtrials=10, numsamples=5)
    sampler.set_evidence([1])
    with pytest.raises(SamplingError):
        sampler.infer()
    sampler = Sampler(bn_impossible, LikelihoodWeighting(), maxtrials=10, numsamples=5, skipfailedsteps=True)
    sampler.set_evidence([1])
    assert sampler.infer().numsamples == 0


def test_evidence_checks():
    sampler = Sampler(bn, ForwardSampling())
    with pytest.raises(EvidenceError):
        sampler.set_evidence([0])
    with pytest.raises(EvidenceError):
        sampler.set_evidence([0, 2])
    with pytest.raises(EvidenceError):
        sampler.set_evidence([-2, 0])
    sampler.set_evidence([-1, 1])
    assert sampler.evidence == [-1, 1]


def test_evidence_consistency():
    sampler = Sampler(bn, ForwardSampling(), debug=True)
    sampler.set_evidence([0, -1])
    dist = sampler.create_distribution()
    with pytest.raises(EvidenceConsistencyError):
        sampler.add_sample(WeightedSample([1, 0]))
    assert dist.numsamples == 0
    assert dist.Z == 0
    sampler.add_sample(WeightedSample([0, 1]))
    assert dist.numsamples == 1


def test_convergence():
    sampler = Sampler(bn, ForwardSampling(), rndseed=5, numsamples=100000,
                      confidencelevel=.95, confidenceintervalsizethreshold=.05)
    dist = sampler.infer()
    assert dist.numsamples < 100000
    assert dist.numsamples % sampler.convergencecheckinterval == 0
    for i in range(len(bn)):
        assert dist.confidence_interval(i, 0).size <= .05


def test_convergence_configuration():
    sampler = Sampler(bn, ForwardSampling(), confidenceintervalsizethreshold=.05)
    with pytest.raises(ConfigurationError):
        sampler.infer()
    with pytest.raises(ConfigurationError):
        sampler.set_convergence_check_interval(0)


def test_info_interval_configuration():
    sampler = Sampler(bn, ForwardSampling(), numsamples=5)
    with pytest.raises(ConfigurationError):
        sampler.handle_params({'infointerval': 0})
    with pytest.raises(ConfigurationError):
        sampler.set_info_interval(-3)
    with pytest.raises(ConfigurationError):
        Sampler(bn, ForwardSampling(), infointerval=0)
    with pytest.raises(ConfigurationError):
        Sampler(bn, ForwardSampling(), convergencecheckinterval=0)
    sampler.handle_params({'infointerval': '2'})
    assert sampler.infer().numsamples == 5


def test_report_per_run():
    sampler = Sampler(bn, ForwardSampling(), rndseed=9, numsamples=10)
    sampler.infer()
    lines = list(sampler._report)
    sampler.infer()
    assert len(sampler._report) == len(lines) == 1


def test_poll_results():
    sampler = Sampler(bn, ForwardSampling(), rndseed=6, numsamples=200)
    assert sampler.poll_results() is None
    dist = sampler.infer()
    snapshot = sampler.poll_results()
    assert snapshot is not dist
    assert snapshot.numsamples == dist.numsamples
    assert snapshot.distribution(1) == dist.distribution(1)


def test_cancel():
    class CancellingStrategy(ForwardSampling):
        def _sample_once(self, sampler, order):
            sampler.cancel()
            return ForwardSampling._sample_once(self, sampler, order)
    sampler = Sampler(bn, CancellingStrategy(), numsamples=100)
    assert sampler.infer().numsamples == 1
    assert sampler.cancelled


def test_params():
    sampler = Sampler(bn, ForwardSampling())
    handled = sampler.handle_params({'numsamples': '10', 'skipfailedsteps': 'yes', 'confidencelevel': .9})
    assert handled == {'numsamples', 'skipfailedsteps', 'confidencelevel'}
    assert sampler.numsamples == 10
    assert sampler.skipfailedsteps is True
    assert sampler.confidencelevel == .9
    with pytest.raises(ConfigurationError):
        sampler.handle_params({'nosuchparam': 1})
    assert sampler.handle_params({'nosuchparam': 1}, strict=False) == set()
    with pytest.raises(NoSuchNodeError):
        sampler.node_index(cause)
    assert sampler.node_index(wet) == 1
    assert sampler.algorithm_name == 'ForwardSampling'


def test_no_network():
    sampler = Sampler(WorldVariables(['a']), ForwardSampling(), numsamples=1)
    with pytest.raises(ConfigurationError):
        sampler.infer()


def main():
    test_network()
    test_sample_forward()
    test_sample_forward_zero_column()
    test_forward_sampling()
    test_forward_sampling_evidence()
    test_likelihood_weighting()
    test_determinism()
    test_failed_steps()
    test_evidence_checks()
    test_evidence_consistency()
    test_convergence()
    test_convergence_configuration()
    test_info_interval_configuration()
    test_report_per_run()
    test_poll_results()
    test_cancel()
    test_params()
    test_no_network()


if __name__ == '__main__':
    main()
