"""Mutation strategies for genetic algorithms."""

from genesim.mutation.order import insert_order_mutation, swap_order_mutation
from genesim.mutation.value import bit_flip_mutation, breeder_value_mutation, random_value_mutation
from genesim.registry import MutationRegistry

# Register built-in mutation strategies
MutationRegistry.register("bit_flip", bit_flip_mutation)
MutationRegistry.register("random_value", random_value_mutation)
MutationRegistry.register("breeder_value", breeder_value_mutation)
MutationRegistry.register("swap_order", swap_order_mutation)
MutationRegistry.register("insert_order", insert_order_mutation)

__all__ = [
    "bit_flip_mutation",
    "breeder_value_mutation",
    "insert_order_mutation",
    "random_value_mutation",
    "swap_order_mutation",
]
