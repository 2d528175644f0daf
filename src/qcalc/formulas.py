"""LaTeX reference text for each metric of each model (display only)."""

from __future__ import annotations

from typing import Dict

NOT_AVAILABLE = "Formula not available."

_ALIASES = {
    "λeff": "lambdaEff",
    "lambda_eff": "lambdaEff",
    "λlost": "lambdaLost",
    "lambda_lost": "lambdaLost",
    "c̄": "cBar",
    "c_bar": "cBar",
}

_MMC_PN = (
    "p_n = \\begin{cases} \\frac{(\\lambda/\\mu)^n}{n!} p_0, & n \\le c \\\\ "
    "\\frac{(\\lambda/\\mu)^n}{c! c^{n-c}} p_0, & %s \\end{cases}"
)

FORMULAS: Dict[str, Dict[str, str]] = {
    "p0": {
        "mm1_inf": "p_0 = 1 - \\rho,\\; \\rho = \\lambda/\\mu < 1",
        "mm1_n": "p_0 = \\frac{1-\\rho}{1-\\rho^{N+1}},\\; \\rho=\\lambda/\\mu",
        "mmc_inf": (
            "p_0 = \\left[\\sum_{n=0}^{c-1} \\frac{(\\lambda/\\mu)^n}{n!} + "
            "\\frac{(\\lambda/\\mu)^c}{c!(1-\\rho)}\\right]^{-1},\\; \\rho=\\lambda/(c\\mu)"
        ),
        "mmc_n": (
            "p_0 = \\left[\\sum_{n=0}^{c-1} \\frac{(\\lambda/\\mu)^n}{n!} + "
            "\\frac{(\\lambda/\\mu)^c (1-(\\frac{\\lambda}{c\\mu})^{N-c+1})}{c!(1-\\frac{\\lambda}{c\\mu})}\\right]^{-1}"
        ),
        "mminf": "p_0 = e^{-\\lambda/\\mu}",
        "mmr_repair": (
            "p_0 = \\left[ \\sum_{n=0}^{R} \\binom{K}{n}\\rho^n + \\sum_{n=R+1}^{K} "
            "\\binom{K}{n} \\frac{n!}{R!R^{n-R}} \\rho^n \\right]^{-1},\\; \\rho=\\lambda/\\mu"
        ),
        "mg1_pk": "p_0 = 1-\\rho,\\; \\rho = \\lambda E\\{t\\}",
    },
    "pN": {
        "mm1_inf": "p_n = p_0 \\rho^n,\\; \\rho = \\lambda/\\mu",
        "mm1_n": "p_N = p_0 \\rho^N",
        "mmc_inf": _MMC_PN % "n > c",
        "mmc_n": _MMC_PN % "N \\ge n > c",
        "mminf": "p_n = \\frac{(\\lambda/\\mu)^n}{n!} e^{-\\lambda/\\mu}",
        "mmr_repair": (
            "p_n = \\begin{cases} \\binom{K}{n} \\rho^n p_0, & 0 \\le n \\le R \\\\ "
            "\\binom{K}{n} \\frac{n!}{R! R^{n-R}} \\rho^n p_0, & R < n \\le K \\end{cases},"
            "\\; \\rho = \\lambda/\\mu"
        ),
        "mg1_pk": "p_n = (\\lambda E\\{t\\})^n (1 - \\lambda E\\{t\\}),\\; n = 0,1,2,\\ldots",
    },
    "Ls": {
        "mm1_inf": "L_s = \\frac{\\rho}{1-\\rho}",
        "mm1_n": "L_s = \\frac{\\rho (1 - (N+1)\\rho^N + N \\rho^{N+1})}{(1-\\rho)(1-\\rho^{N+1})}",
        "mmc_inf": "L_s = L_q + \\frac{\\lambda}{\\mu}",
        "mmc_n": "L_s = \\sum_{n=0}^{N} n p_n",
        "mminf": "L_s = \\lambda/\\mu",
        "mmr_repair": "L_s = \\sum_{n=0}^{K} n p_n",
        "mg1_pk": (
            "L_s = \\lambda E\\{t\\} + \\frac{\\lambda^2(E\\{t\\}^2 + Var\\{t\\})}{2(1-\\lambda E\\{t\\})}"
        ),
    },
    "Lq": {
        "mm1_inf": "L_q = \\frac{\\rho^2}{1-\\rho}",
        "mm1_n": "L_q = L_s - (1 - p_0)",
        "mmc_inf": "L_q = \\frac{\\lambda^{c+1}}{(c - \\lambda/\\mu)^2 (c-1)! \\mu^{c+1}} p_0",
        "mmc_n": "L_q = \\sum_{n=c+1}^{N} (n-c) p_n",
        "mminf": "L_q = 0",
        "mmr_repair": "L_q = \\sum_{n=R+1}^{K} (n-R) p_n",
        "mg1_pk": "L_q = \\frac{\\lambda^2 Var\\{t\\} + \\rho^2}{2(1-\\rho)}",
    },
    "Ws": {
        "mm1_inf": "W_s = \\frac{1}{\\mu - \\lambda}",
        "mm1_n": "W_s = \\frac{L_s}{\\lambda(1-p_N)}",
        "mmc_inf": "W_s = W_q + \\frac{1}{\\mu}",
        "mmc_n": "W_s = \\frac{L_s}{\\lambda(1-p_N)}",
        "mminf": "W_s = 1/\\mu",
        "mmr_repair": "W_s = \\frac{L_s}{\\lambda(K-L_s)}",
        "mg1_pk": "W_s = W_q + E\\{t\\}",
    },
    "Wq": {
        "mm1_inf": "W_q = \\frac{\\lambda}{\\mu(\\mu-\\lambda)}",
        "mm1_n": "W_q = \\frac{L_q}{\\lambda(1-p_N)}",
        "mmc_inf": "W_q = L_q / \\lambda",
        "mmc_n": "W_q = \\frac{L_q}{\\lambda(1-p_N)}",
        "mminf": "W_q = 0",
        "mmr_repair": "W_q = \\frac{L_q}{\\lambda(K-L_s)}",
        "mg1_pk": "W_q = L_q / \\lambda",
    },
    "cBar": {
        "mm1_inf": "\\bar{c} = \\rho",
        "mm1_n": "\\bar{c} = 1 - p_0",
        "mmc_inf": "\\bar{c} = \\lambda/\\mu",
        "mmc_n": "\\bar{c} = L_s - L_q",
        "mminf": "\\bar{c} = \\lambda/\\mu",
        "mmr_repair": "\\bar{c} = \\sum_{n=0}^{K} \\min(n,R) p_n",
        "mg1_pk": "\\bar{c} = \\rho",
    },
}

_BOUNDED = {"mm1_n": "\\lambda (1 - p_N)", "mmc_n": "\\lambda (1 - p_N)"}


def _display(body: str) -> str:
    return f"$${body}$$"


def get_formula(metric: str, model_id: str) -> str:
    """Return the display-math formula for `metric` under `model_id`."""
    metric = _ALIASES.get(metric, metric)
    if metric == "lambdaEff":
        if model_id in _BOUNDED:
            return _display("\\lambda_{eff} = " + _BOUNDED[model_id])
        if model_id == "mmr_repair":
            return _display("\\lambda_{eff} = \\lambda (K - L_s)")
        return _display("\\lambda_{eff} = \\lambda")
    if metric == "lambdaLost":
        if model_id in _BOUNDED:
            return _display("\\lambda_{lost} = \\lambda p_N")
        return _display("\\lambda_{lost} = 0")

    table = FORMULAS.get(metric)
    if table is None:
        return _display(NOT_AVAILABLE)
    if model_id in table:
        return _display(table[model_id])
    if metric == "pN":
        return _display("Not applicable (∞ capacity).")
    return _display(NOT_AVAILABLE)
