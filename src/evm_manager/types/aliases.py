from eth_typing import ChainId as EthTypingChainId

type ChainId = int | EthTypingChainId
type CurrencyIdNumber = int  # 32-bit numeric currency id
type Decimals = int
type Slot = bytes  # 32-byte wire representation of a currency id
