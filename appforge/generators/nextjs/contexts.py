"""React context templates generated for each domain without a completion call."""

from dataclasses import dataclass

from appforge.generators.nextjs.naming import kebab_case


@dataclass(frozen=True)
class DomainTemplate:
    """A deterministic file tied to a domain."""

    name: str
    path: str
    content: str

    @property
    def cache_name(self) -> str:
        return kebab_case(self.name)


CART_CONTEXT = """'use client';

import React, { createContext, useContext, useReducer, ReactNode } from 'react';

export interface CartItem {
  id: string;
  name: string;
  price: number;
  quantity: number;
  image?: string;
}

interface CartState {
  items: CartItem[];
  isOpen: boolean;
}

type CartAction =
  | { type: 'ADD_ITEM'; payload: CartItem }
  | { type: 'REMOVE_ITEM'; payload: string }
  | { type: 'UPDATE_QUANTITY'; payload: { id: string; quantity: number } }
  | { type: 'CLEAR_CART' }
  | { type: 'TOGGLE_CART' };

function cartReducer(state: CartState, action: CartAction): CartState {
  switch (action.type) {
    case 'ADD_ITEM': {
      const existing = state.items.find((item) => item.id === action.payload.id);
      const items = existing
        ? state.items.map((item) =>
            item.id === action.payload.id
              ? { ...item, quantity: item.quantity + action.payload.quantity }
              : item
          )
        : [...state.items, action.payload];
      return { ...state, items };
    }
    case 'REMOVE_ITEM':
      return { ...state, items: state.items.filter((item) => item.id !== action.payload) };
    case 'UPDATE_QUANTITY':
      return {
        ...state,
        items: state.items
          .map((item) =>
            item.id === action.payload.id ? { ...item, quantity: action.payload.quantity } : item
          )
          .filter((item) => item.quantity > 0),
      };
    case 'CLEAR_CART':
      return { ...state, items: [] };
    case 'TOGGLE_CART':
      return { ...state, isOpen: !state.isOpen };
    default:
      return state;
  }
}

interface CartContextValue extends CartState {
  total: number;
  itemCount: number;
  addItem: (item: CartItem) => void;
  removeItem: (id: string) => void;
  updateQuantity: (id: string, quantity: number) => void;
  clearCart: () => void;
  toggleCart: () => void;
}

const CartContext = createContext<CartContextValue | undefined>(undefined);

export function CartProvider({ children }: { children: ReactNode }) {
  const [state, dispatch] = useReducer(cartReducer, { items: [], isOpen: false });
  const total = state.items.reduce((sum, item) => sum + item.price * item.quantity, 0);
  const itemCount = state.items.reduce((sum, item) => sum + item.quantity, 0);

  const value: CartContextValue = {
    ...state,
    total,
    itemCount,
    addItem: (item) => dispatch({ type: 'ADD_ITEM', payload: item }),
    removeItem: (id) => dispatch({ type: 'REMOVE_ITEM', payload: id }),
    updateQuantity: (id, quantity) => dispatch({ type: 'UPDATE_QUANTITY', payload: { id, quantity } }),
    clearCart: () => dispatch({ type: 'CLEAR_CART' }),
    toggleCart: () => dispatch({ type: 'TOGGLE_CART' }),
  };

  return <CartContext.Provider value={value}>{children}</CartContext.Provider>;
}

export function useCart() {
  const context = useContext(CartContext);
  if (!context) {
    throw new Error('useCart must be used within a CartProvider');
  }
  return context;
}
"""

THEME_CONTEXT = """'use client';

import React, { createContext, useContext, useEffect, useState, ReactNode } from 'react';

type Theme = 'light' | 'dark';

interface ThemeContextValue {
  theme: Theme;
  toggleTheme: () => void;
}

const ThemeContext = createContext<ThemeContextValue | undefined>(undefined);

export function ThemeProvider({ children }: { children: ReactNode }) {
  const [theme, setTheme] = useState<Theme>('light');

  useEffect(() => {
    const stored = window.localStorage.getItem('theme');
    if (stored === 'light' || stored === 'dark') {
      setTheme(stored);
    }
  }, []);

  useEffect(() => {
    document.documentElement.classList.toggle('dark', theme === 'dark');
    window.localStorage.setItem('theme', theme);
  }, [theme]);

  const toggleTheme = () => setTheme((current) => (current === 'light' ? 'dark' : 'light'));

  return <ThemeContext.Provider value={{ theme, toggleTheme }}>{children}</ThemeContext.Provider>;
}

export function useTheme() {
  const context = useContext(ThemeContext);
  if (!context) {
    throw new Error('useTheme must be used within a ThemeProvider');
  }
  return context;
}
"""


def state_context(name: str, value_type: str, type_body: str, initial: str) -> str:
    """A context holding one value with a setter and a reset.

    ``type_body`` is the TypeScript interface body of ``value_type`` and
    ``initial`` the initial value expression.
    """
    return f"""'use client';

import React, {{ createContext, useContext, useState, ReactNode }} from 'react';

export interface {value_type} {{
{type_body}
}}

interface {name}ContextValue {{
  value: {value_type};
  update: (changes: Partial<{value_type}>) => void;
  reset: () => void;
}}

const initialValue: {value_type} = {initial};

const {name}Context = createContext<{name}ContextValue | undefined>(undefined);

export function {name}Provider({{ children }}: {{ children: ReactNode }}) {{
  const [value, setValue] = useState<{value_type}>(initialValue);

  const update = (changes: Partial<{value_type}>) =>
    setValue((current) => ({{ ...current, ...changes }}));
  const reset = () => setValue(initialValue);

  return (
    <{name}Context.Provider value={{{{ value, update, reset }}}}>
      {{children}}
    </{name}Context.Provider>
  );
}}

export function use{name}() {{
  const context = useContext({name}Context);
  if (!context) {{
    throw new Error('use{name} must be used within a {name}Provider');
  }}
  return context;
}}
"""


AUTH_CONTEXT = state_context(
    "Auth",
    "AuthState",
    "  user: { id: string; email: string; name: string } | null;\n  isAuthenticated: boolean;",
    "{ user: null, isAuthenticated: false }",
)

USER_CONTEXT = state_context(
    "User",
    "UserProfile",
    "  id: string;\n  name: string;\n  email: string;\n  role: 'owner' | 'admin' | 'member';",
    "{ id: '', name: '', email: '', role: 'member' }",
)

SUBSCRIPTION_CONTEXT = state_context(
    "Subscription",
    "SubscriptionState",
    "  plan: 'free' | 'pro' | 'enterprise';\n  status: 'active' | 'trialing' | 'canceled';\n  seats: number;\n  usage: number;\n  limit: number;",
    "{ plan: 'free', status: 'active', seats: 1, usage: 0, limit: 1000 }",
)

DOMAIN_CONTEXTS: dict[str, list[DomainTemplate]] = {
    "ecommerce": [
        DomainTemplate("CartContext", "contexts/CartContext.tsx", CART_CONTEXT),
        DomainTemplate("AuthContext", "contexts/AuthContext.tsx", AUTH_CONTEXT),
    ],
    "saas": [
        DomainTemplate("UserContext", "contexts/UserContext.tsx", USER_CONTEXT),
        DomainTemplate("SubscriptionContext", "contexts/SubscriptionContext.tsx", SUBSCRIPTION_CONTEXT),
    ],
    "portfolio": [
        DomainTemplate("ThemeContext", "contexts/ThemeContext.tsx", THEME_CONTEXT),
    ],
    "blog": [],
}


def contexts_for(domain: str) -> list[DomainTemplate]:
    return DOMAIN_CONTEXTS.get(domain, [])


def providers(domain: str) -> DomainTemplate:
    """``components/Providers.tsx`` nesting every context provider of the domain."""
    names = [template.name.removesuffix("Context") for template in contexts_for(domain)]
    imports = "".join(
        f"import {{ {name}Provider }} from '../contexts/{name}Context';\n" for name in names
    )
    tree = "<>{children}</>"
    for name in reversed(names):
        tree = f"<{name}Provider>{tree}</{name}Provider>"
    content = f"""'use client';

import React, {{ ReactNode }} from 'react';
{imports}
export function Providers({{ children }}: {{ children: ReactNode }}) {{
  return {tree};
}}

export default Providers;
"""
    return DomainTemplate("Providers", "components/Providers.tsx", content)
