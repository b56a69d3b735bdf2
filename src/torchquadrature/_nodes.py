"""Tabulated nodes and weights for the fixed-order quadrature rules."""

from typing import Optional, Tuple

import torch
from torch import Tensor

from torchquadrature._exceptions import InvalidConfigurationError

# Gauss-Kronrod nodes and weights on [-1, 1].
# Reference: QUADPACK (Piessens et al., 1983)
#
# Only the non-negative half of each symmetric rule is stored, ascending from
# the zero node. The Gauss mask marks which of those nodes belong to the
# embedded Gauss rule.

_GK15_POSITIVE_NODES = [
    0.000000000000000000000000000000000,
    0.207784955007898467600689403773245,
    0.405845151377397166906606412076961,
    0.586087235467691130294144838258730,
    0.741531185599394439863864773280788,
    0.864864423359769072789712788640926,
    0.949107912342758524526189684047851,
    0.991455371120812639206854697526329,
]

_GK15_POSITIVE_K_WEIGHTS = [
    0.209482141084727828012999174891714,
    0.204432940075298892414161999234649,
    0.190350578064785409913256402421014,
    0.169004726639267902826583426598550,
    0.140653259715525918745189590510238,
    0.104790010322250183839876322541518,
    0.063092092629978553290700663189204,
    0.022935322010529224963732008058970,
]

# G7 weights, paired with nodes 0, 0.406, 0.742, 0.949
_GK15_POSITIVE_G_WEIGHTS = [
    0.417959183673469387755102040816327,
    0.381830050505118944950369775488975,
    0.279705391489276667901467771423780,
    0.129484966168869693270611432679082,
]

_GK15_GAUSS_MASK = [True, False, True, False, True, False, True, False]

_GK21_POSITIVE_NODES = [
    0.000000000000000000000000000000000,
    0.148874338981631210884826001129720,
    0.294392862701460198131126603103866,
    0.433395394129247190799265943165784,
    0.562757134668604683339000099272694,
    0.679409568299024406234327365114874,
    0.780817726586416897063717578345042,
    0.865063366688984510732096688423493,
    0.930157491355708226001207180059508,
    0.973906528517171720077964012084452,
    0.995657163025808080735527280689003,
]

_GK21_POSITIVE_K_WEIGHTS = [
    0.149445554002916905664936468389821,
    0.147739104901338491374841515972068,
    0.142775938577060080797094273138717,
    0.134709217311473325928054001771707,
    0.123491976262065851077958109831074,
    0.109387158802297641899210590325805,
    0.093125454583697605535065465083366,
    0.075039674810919952767043140916190,
    0.054755896574351996031381300244580,
    0.032558162307964727478818972459390,
    0.011694638867371874278064396062192,
]

# G10 has no zero node
_GK21_POSITIVE_G_WEIGHTS = [
    0.295524224714752870173892994651338,
    0.269266719309996355091226921569469,
    0.219086362515982043995534934228163,
    0.149451349150580593145776339657697,
    0.066671344308688137593568809893332,
]

_GK21_GAUSS_MASK = [
    False,
    True,
    False,
    True,
    False,
    True,
    False,
    True,
    False,
    True,
    False,
]

_GK_DATA = {
    15: (
        _GK15_POSITIVE_NODES,
        _GK15_POSITIVE_K_WEIGHTS,
        _GK15_POSITIVE_G_WEIGHTS,
        _GK15_GAUSS_MASK,
    ),
    21: (
        _GK21_POSITIVE_NODES,
        _GK21_POSITIVE_K_WEIGHTS,
        _GK21_POSITIVE_G_WEIGHTS,
        _GK21_GAUSS_MASK,
    ),
}


def _reflect(
    positive_nodes, positive_k_weights, positive_g_weights, gauss_mask
):
    """Expand a half table into the full ascending rule.

    Returns plain lists ``(nodes, k_weights, g_weights, g_indices)`` where
    ``g_indices`` points into ``nodes`` and is ascending.
    """
    n_neg = len(positive_nodes) - 1

    nodes = [-x for x in reversed(positive_nodes[1:])] + list(positive_nodes)
    k_weights = list(reversed(positive_k_weights[1:])) + list(
        positive_k_weights
    )

    gauss_positions = [i for i, is_gauss in enumerate(gauss_mask) if is_gauss]
    pairs = []
    for i, w in zip(gauss_positions, positive_g_weights):
        pairs.append((n_neg + i, w))
        if i > 0:
            pairs.append((n_neg - i, w))
    pairs.sort()

    g_indices = [index for index, _ in pairs]
    g_weights = [w for _, w in pairs]

    return nodes, k_weights, g_weights, g_indices


def gauss_kronrod_nodes_weights(
    order: int,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> Tuple[Tensor, Tensor, Tensor, Tensor]:
    """
    Return Gauss-Kronrod nodes and weights on [-1, 1].

    Parameters
    ----------
    order : int
        Kronrod order: 15 (G7-K15) or 21 (G10-K21).
    dtype : torch.dtype
        Data type for output tensors.
    device : torch.device, optional
        Device for output tensors.

    Returns
    -------
    nodes : Tensor
        Kronrod nodes, shape (order,), sorted ascending.
    kronrod_weights : Tensor
        Kronrod weights, shape (order,).
    gauss_weights : Tensor
        Weights of the embedded Gauss rule, shape (order // 2,).
    gauss_indices : Tensor
        Indices into ``nodes`` of the Gauss nodes, shape (order // 2,).

    Raises
    ------
    InvalidConfigurationError
        If no table is available for ``order``.

    References
    ----------
    Piessens, R., et al. (1983). QUADPACK: A subroutine package for automatic
    integration.
    """
    if order not in _GK_DATA:
        raise InvalidConfigurationError(
            f"order must be 15 or 21, got {order}"
        )

    nodes, k_weights, g_weights, g_indices = _reflect(*_GK_DATA[order])

    return (
        torch.tensor(nodes, dtype=dtype, device=device),
        torch.tensor(k_weights, dtype=dtype, device=device),
        torch.tensor(g_weights, dtype=dtype, device=device),
        torch.tensor(g_indices, dtype=torch.long, device=device),
    )


# 64-point Gauss-Hermite nodes and weights for the weight exp(-x^2).
# Roots of H_64 refined by Newton's method in 60-digit arithmetic, weights
# 2 / p'(x)^2 of the orthonormal Hermite polynomial (Press et al., Numerical
# Recipes, gauher), rounded to 34 significant digits.
#
# Only the positive half is stored, ascending. The rule has no zero node; the
# negative half is the mirror image with identical weights.

_GH64_POSITIVE_NODES = [
    0.1383022449870097241150497679666744,
    0.4149888241210786845769291291996859,
    0.6919223058100445772682192875955947,
    0.9692694230711780167435414890191023,
    1.24720015694311794069356453069359,
    1.525889140209863662948970133151528,
    1.805517171465544918903773574186889,
    2.086272879881762020832563302363221,
    2.368354588632401404111511265341516,
    2.651972435430635011005457785998431,
    2.93735082300462180968533902619139,
    3.224731291992035725848171110188419,
    3.514375935740906211539950586474333,
    3.806571513945360461165972000460225,
    4.101634474566656714970981238455522,
    4.399917168228137647767932535438923,
    4.701815647407499816097538015812822,
    5.007779602198768196443702627184136,
    5.318325224633270857323649515199378,
    5.634052164349972147249920483307154,
    5.955666326799486045344567180984366,
    6.284011228774828235418093195070243,
    6.620112262636027379036660108937914,
    6.965241120551107529242642193492688,
    7.321013032780949201189569363719477,
    7.68954016404049682844780422986949,
    8.073687285010225225858791140758144,
    8.477529083379863090564166344821916,
    8.907249099964769757295972885642943,
    9.373159549646721162545652439723862,
    9.895287586829539021204461477159608,
    10.52612316796054588332682628381528,
]

_GH64_POSITIVE_WEIGHTS = [
    2.713774249413039779456065084184279e-01,
    2.329947860626780466505660293325675e-01,
    1.716858423490837020007279701237768e-01,
    1.084983493061868406330258455060973e-01,
    5.873998196409943454968894625183171e-02,
    2.72031289536889184538348212614932e-02,
    1.075604050987913704946517278667313e-02,
    3.622586978534458760668125371622652e-03,
    1.036329099507577663456741746283101e-03,
    2.509836985130624860823620179819094e-04,
    5.125929135786274660821911412739621e-05,
    8.788499230850359181444047406704301e-06,
    1.258340251031184576157842180019028e-06,
    1.495532936727247061102461692934817e-07,
    1.465125316476109354926622003804004e-08,
    1.1736167423215493435425064670822e-09,
    7.615217250145451353315295675319371e-11,
    3.959177766947723927236445864254584e-12,
    1.628340730709720362084307081240893e-13,
    5.218623726590847522957808513052588e-15,
    1.280093391322438041639563295263371e-16,
    2.351884710675819116957675915558445e-18,
    3.15225456650378141612134668341023e-20,
    2.982862784279851154478700702016035e-22,
    1.911706883300642829958456965534449e-24,
    7.861797788925910369099991496278812e-27,
    1.929103595464966850301968779067069e-29,
    2.549660899112999256604766580440964e-32,
    1.557390624629763802309335380264818e-35,
    3.421138011255740504327221828145741e-39,
    1.679747990108159218666288330629856e-43,
    5.535706535856942820575463300987129e-49,
]

_GH_DATA = {
    64: (_GH64_POSITIVE_NODES, _GH64_POSITIVE_WEIGHTS),
}


def gauss_hermite_nodes_weights(
    order: int = 64,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> Tuple[Tensor, Tensor]:
    r"""
    Return Gauss-Hermite nodes and weights for the physicists' convention.

    The rule integrates against the weight :math:`e^{-x^2}` on the real line:

    .. math::

        \int_{-\infty}^{\infty} f(x) e^{-x^2} dx \approx \sum_{i=1}^{n} w_i f(x_i)

    Parameters
    ----------
    order : int
        Number of nodes. Only the tabulated 64-point rule is available.
    dtype : torch.dtype
        Data type for output tensors.
    device : torch.device, optional
        Device for output tensors.

    Returns
    -------
    nodes : Tensor
        Quadrature nodes, shape (order,), symmetric and sorted ascending.
    weights : Tensor
        Quadrature weights, shape (order,). They sum to sqrt(pi).

    Raises
    ------
    InvalidConfigurationError
        If no table is available for ``order``.
    """
    if order not in _GH_DATA:
        raise InvalidConfigurationError(f"order must be 64, got {order}")

    positive_nodes, positive_weights = _GH_DATA[order]

    nodes = [-x for x in reversed(positive_nodes)] + list(positive_nodes)
    weights = list(reversed(positive_weights)) + list(positive_weights)

    return (
        torch.tensor(nodes, dtype=dtype, device=device),
        torch.tensor(weights, dtype=dtype, device=device),
    )
