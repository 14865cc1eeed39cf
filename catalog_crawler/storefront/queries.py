"""GraphQL documents for the Shopify Storefront API."""

PRODUCT_FIELDS = """
    id
    title
    handle
    description
    descriptionHtml
    productType
    tags
    vendor
    createdAt
    publishedAt
    updatedAt
    options {
      id
      name
      values
    }
    variants(first: 250) {
      edges {
        node {
          id
          title
          quantityAvailable
          availableForSale
          requiresShipping
          selectedOptions {
            name
            value
          }
          compareAtPrice {
            amount
            currencyCode
          }
          price {
            amount
            currencyCode
          }
          sku
          image {
            url
            altText
            width
            height
          }
        }
      }
    }
    images(first: 20) {
      edges {
        node {
          url
          altText
          width
          height
        }
      }
    }
    priceRange {
      minVariantPrice {
        amount
        currencyCode
      }
      maxVariantPrice {
        amount
        currencyCode
      }
    }
    compareAtPriceRange {
      minVariantPrice {
        amount
        currencyCode
      }
      maxVariantPrice {
        amount
        currencyCode
      }
    }
"""

COLLECTIONS_QUERY = """
query GetCollections($first: Int!, $after: String) {
  collections(first: $first, after: $after) {
    edges {
      node {
        id
        handle
        title
        description
        descriptionHtml
        productsCount
        image {
          url
          altText
        }
      }
    }
    pageInfo {
      hasNextPage
      endCursor
    }
  }
}
"""

PRODUCTS_BY_COLLECTION_QUERY = """
query GetProductsByCollection($handle: String!, $first: Int!, $after: String) {
  collection(handle: $handle) {
    title
    products(first: $first, after: $after) {
      edges {
        node {
%s
        }
      }
      pageInfo {
        hasNextPage
        endCursor
      }
    }
  }
}
""" % PRODUCT_FIELDS

PRODUCTS_QUERY = """
query GetProducts($first: Int!, $after: String) {
  products(first: $first, after: $after) {
    edges {
      node {
%s
      }
    }
    pageInfo {
      hasNextPage
      endCursor
    }
  }
}
""" % PRODUCT_FIELDS
