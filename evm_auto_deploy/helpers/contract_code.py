"""
ERC-20 token contract source and compilation.

The token takes its name, symbol and whole-unit supply as constructor
arguments, so the contract is compiled once per solc version and reused
for every deployment in a batch.
"""
from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Any

from solcx import compile_standard, install_solc

logger = logging.getLogger(__name__)

CONTRACT_NAME = "AutoToken"
SOURCE_FILE = f"{CONTRACT_NAME}.sol"

TOKEN_SOURCE = """\
// SPDX-License-Identifier: MIT
pragma solidity ^0.8.0;

contract AutoToken {
    string public name;
    string public symbol;
    uint8 public constant decimals = 18;
    uint256 public totalSupply;

    mapping(address => uint256) public balanceOf;
    mapping(address => mapping(address => uint256)) public allowance;

    event Transfer(address indexed from, address indexed to, uint256 value);
    event Approval(address indexed owner, address indexed spender, uint256 value);

    constructor(string memory _name, string memory _symbol, uint256 _supply) {
        name = _name;
        symbol = _symbol;
        totalSupply = _supply * (10 ** uint256(decimals));
        balanceOf[msg.sender] = totalSupply;
        emit Transfer(address(0), msg.sender, totalSupply);
    }

    function transfer(address to, uint256 value) public returns (bool) {
        require(balanceOf[msg.sender] >= value, "Insufficient balance");
        balanceOf[msg.sender] -= value;
        balanceOf[to] += value;
        emit Transfer(msg.sender, to, value);
        return true;
    }

    function approve(address spender, uint256 value) public returns (bool) {
        allowance[msg.sender][spender] = value;
        emit Approval(msg.sender, spender, value);
        return true;
    }

    function transferFrom(address from, address to, uint256 value) public returns (bool) {
        require(balanceOf[from] >= value, "Insufficient balance");
        require(allowance[from][msg.sender] >= value, "Allowance exceeded");
        allowance[from][msg.sender] -= value;
        balanceOf[from] -= value;
        balanceOf[to] += value;
        emit Transfer(from, to, value);
        return true;
    }
}
"""


@dataclass(frozen=True)
class CompiledContract:
    abi: list[dict[str, Any]]
    bytecode: str


def build_standard_input(source: str = TOKEN_SOURCE) -> dict[str, Any]:
    """Standard-JSON compiler input selecting ABI and creation bytecode."""
    return {
        "language": "Solidity",
        "sources": {SOURCE_FILE: {"content": source}},
        "settings": {
            "optimizer": {"enabled": True, "runs": 200},
            "outputSelection": {"*": {"*": ["abi", "evm.bytecode"]}},
        },
    }


def extract_contract(compiled: dict[str, Any]) -> CompiledContract:
    """Pull ABI and 0x-prefixed bytecode out of the compiler output."""
    contract_data = compiled["contracts"][SOURCE_FILE][CONTRACT_NAME]
    bytecode = contract_data["evm"]["bytecode"]["object"]
    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode
    return CompiledContract(abi=contract_data["abi"], bytecode=bytecode)


@functools.lru_cache(maxsize=None)
def compile_token_contract(solc_version: str) -> CompiledContract:
    """Compile the token contract, installing solc if needed.

    Cached per version; the first call in a run pays for compilation.
    """
    logger.info("Compiling %s with solc %s", CONTRACT_NAME, solc_version)
    install_solc(solc_version)
    compiled = compile_standard(build_standard_input(), solc_version=solc_version)
    return extract_contract(compiled)
