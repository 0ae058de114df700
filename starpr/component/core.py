'''Name-keyed registers of component functions.

Each component module (quotas, tie-breakers) keeps a dictionary of its
functions keyed by name. The factories here build the decorator that fills
the dictionary and the functions that read from it, so that evaluators can
be configured with plain strings. There should normally be no need to use
these functions directly.
'''

from typing import Callable, Dict, Tuple, Union


def marker(register: Dict[str, Callable],
           name: str,
           ) -> Callable[[Callable], Callable]:
    '''Build a decorator that adds a function to the register.'''
    def mark_function(func):
        register[func.__name__] = func
        return func
    return mark_function


def getter(register: Dict[str, Callable],
           name: str,
           ) -> Callable[[str], Callable]:
    '''Build a function retrieving a registered function by its name.'''
    def get(func_def: str) -> Callable:
        try:
            return register[func_def]
        except KeyError:
            raise KeyError(f'unknown {name}: {func_def}')
    get.__doc__ = f'Return a {name} function by its name.'
    return get


def constructer(register: Dict[str, Callable],
                name: str,
                ) -> Callable[[Union[str, Callable]], Callable]:
    '''Build a retriever that also passes custom callables through.'''
    get = getter(register, name)

    def construct(func_def: Union[str, Callable]) -> Callable:
        if callable(func_def):
            return func_def
        return get(func_def)
    construct.__doc__ = (
        f'Get a {name} function by its name from the register. If a custom'
        ' callable is given, pass it through unchanged.'
    )
    return construct


def register_functions(register: Dict[str, Callable],
                       name: str,
                       ) -> Tuple[Callable, Callable, Callable]:
    '''Construct the marker, getter and constructer functions at one call.'''
    return (
        marker(register, name),
        getter(register, name),
        constructer(register, name),
    )

