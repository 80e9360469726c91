ADDRESS_FIELDS = """
    firstName
    lastName
    company
    address1
    address2
    city
    province
    provinceCode
    country
    countryCodeV2
    zip
    phone
"""

MONEY_BAG_FIELDS = """
    shopMoney {
      amount
      currencyCode
    }
"""

# Page caps: orders with more than 50 line items or 10 shipping lines are
# truncated by the API.
GET_ORDER_WITH_PRODUCT_TAGS = f"""
  query GetOrderWithProductTags($id: ID!) {{
    order(id: $id) {{
      id
      name
      tags
      note
      email
      customer {{
        id
      }}
      shippingAddress {{ {ADDRESS_FIELDS} }}
      billingAddress {{ {ADDRESS_FIELDS} }}
      totalShippingPriceSet {{ {MONEY_BAG_FIELDS} }}
      totalDiscountsSet {{ {MONEY_BAG_FIELDS} }}
      shippingLines(first: 10) {{
        nodes {{
          title
          originalPriceSet {{ {MONEY_BAG_FIELDS} }}
        }}
      }}
      lineItems(first: 50) {{
        nodes {{
          id
          title
          quantity
          originalUnitPriceSet {{ {MONEY_BAG_FIELDS} }}
          discountAllocations {{
            allocatedAmountSet {{ {MONEY_BAG_FIELDS} }}
          }}
          variant {{
            id
          }}
          product {{
            id
            tags
          }}
        }}
      }}
    }}
  }}
"""

GET_ORDER_BY_NUMBER = """
  query GetOrderByNumber($query: String!) {
    orders(first: 1, query: $query) {
      nodes {
        id
        name
      }
    }
  }
"""

TAGS_ADD = """
  mutation TagsAdd($id: ID!, $tags: [String!]!) {
    tagsAdd(id: $id, tags: $tags) {
      node {
        id
      }
      userErrors {
        field
        message
      }
    }
  }
"""

ORDER_CANCEL = """
  mutation OrderCancel(
    $orderId: ID!
    $reason: OrderCancelReason!
    $restock: Boolean!
    $notifyCustomer: Boolean
    $staffNote: String
    $refundMethod: OrderCancelRefundMethodInput
  ) {
    orderCancel(
      orderId: $orderId
      reason: $reason
      restock: $restock
      notifyCustomer: $notifyCustomer
      staffNote: $staffNote
      refundMethod: $refundMethod
    ) {
      job {
        id
      }
      orderCancelUserErrors {
        field
        message
      }
    }
  }
"""

DRAFT_ORDER_CREATE = """
  mutation DraftOrderCreate($input: DraftOrderInput!) {
    draftOrderCreate(input: $input) {
      draftOrder {
        id
        name
      }
      userErrors {
        field
        message
      }
    }
  }
"""

DRAFT_ORDER_COMPLETE = """
  mutation DraftOrderComplete($id: ID!) {
    draftOrderComplete(id: $id) {
      draftOrder {
        order {
          id
          name
        }
      }
      userErrors {
        field
        message
      }
    }
  }
"""

ORDER_UPDATE = """
  mutation OrderUpdate($input: OrderInput!) {
    orderUpdate(input: $input) {
      order {
        id
      }
      userErrors {
        field
        message
      }
    }
  }
"""
