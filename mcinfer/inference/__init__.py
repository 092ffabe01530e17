from .sampling import sample
from .distribution import SampledDistribution, NetworkDistribution, WeightedSample, ConfidenceInterval
from .sampler import Sampler, InferenceStrategy
from .forward import ForwardSampling, LikelihoodWeighting
from .samplesat import SampleSAT, ConstraintSampler
from .mcsat import MCSAT, MCSATStrategy
from .timed import TimeLimitedInference
